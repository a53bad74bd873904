from __future__ import annotations

import io
from typing import Optional

from flask import Flask, jsonify, request, send_file

from .audio import read_audio
from .config import CodecConfig
from .errors import AuthenticationFailure, FormatError, InputError, ResourceError
from .pixels import load_png, png_bytes
from .session import CipherSession
from .strength import score


def create_app(config: Optional[CodecConfig] = None) -> Flask:
    config = config or CodecConfig.from_env()
    app = Flask(__name__)
    app.config["CODEC"] = config
    app.logger.setLevel(config.log_level)

    def _read_upload(field: str):
        upload = request.files.get(field)
        if upload is None:
            return None, None
        data = upload.read()
        if len(data) > config.max_upload_bytes:
            return upload, False
        return upload, data

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.post("/strength")
    def strength():
        result = score(request.form.get("password", "").strip())
        return jsonify({"level": result.level.label, "score": result.score, "allowed": result.allowed})

    @app.post("/encrypt")
    def encrypt():
        password = request.form.get("password", "").strip()
        upload, data = _read_upload("audio")
        if upload is None or not password:
            return jsonify({"error": "missing inputs"}), 400
        if data is False:
            return jsonify({"error": "size"}), 413
        try:
            audio = read_audio(io.BytesIO(data))
        except ResourceError:
            return jsonify({"error": "type"}), 415
        with CipherSession(config) as session:
            try:
                grid = session.encrypt(audio, password)
            except InputError as e:
                return jsonify({"error": str(e)}), 400
            body = png_bytes(grid)
        app.logger.info("encrypt: %s -> %d byte image", getattr(upload, "filename", ""), len(body))
        return send_file(io.BytesIO(body), mimetype="image/png", as_attachment=True, download_name="encrypted.png")

    @app.post("/decrypt")
    def decrypt():
        password = request.form.get("password", "").strip()
        upload, data = _read_upload("image")
        if upload is None or not password:
            return jsonify({"error": "missing inputs"}), 400
        if data is False:
            return jsonify({"error": "size"}), 413
        try:
            grid = load_png(io.BytesIO(data))
        except ResourceError:
            return jsonify({"error": "type"}), 415
        buf = io.BytesIO()
        with CipherSession(config) as session:
            try:
                session.decrypt(grid, password)
            except (FormatError, AuthenticationFailure):
                app.logger.info("decrypt: rejected %s", getattr(upload, "filename", ""))
                return jsonify({"error": "decrypt"}), 400
            session.export_wav(buf)
        buf.seek(0)
        return send_file(buf, mimetype="audio/wav", as_attachment=True, download_name="decrypted.wav")

    return app
