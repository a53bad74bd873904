from __future__ import annotations

from audio_cipher.web import create_app


app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=8000, debug=True)
