import io
import unittest

import numpy as np

from audio_cipher.audio import AudioSamples, read_audio
from audio_cipher.errors import AuthenticationFailure, InputError, ResourceError
from audio_cipher.pixels import load_png
from audio_cipher.session import CipherSession


PASSPHRASE = "Tr0ub4dor&3"


class CipherSessionTests(unittest.TestCase):
    def setUp(self):
        t = np.arange(400, dtype=np.float32) / 8000
        self.audio = AudioSamples(0.25 * np.sin(2 * np.pi * 300 * t), 8000)

    def test_encrypt_then_decrypt_and_export(self):
        with CipherSession() as session:
            grid = session.encrypt(self.audio, PASSPHRASE)
            self.assertIs(session.last_grid, grid)
            png = io.BytesIO()
            session.export_png(png)
            png.seek(0)

            restored = session.decrypt(load_png(png), PASSPHRASE)
            self.assertIs(session.last_audio, restored)
            self.assertEqual(restored.samples.tobytes(), self.audio.samples.tobytes())

            wav = io.BytesIO()
            session.export_wav(wav)
            wav.seek(0)
            self.assertEqual(read_audio(wav).sample_rate, 8000)
        self.assertTrue(session.closed)
        self.assertIsNone(session.last_grid)
        self.assertIsNone(session.last_audio)

    def test_nothing_to_export(self):
        with CipherSession() as session:
            with self.assertRaises(InputError):
                session.export_png(io.BytesIO())
            with self.assertRaises(InputError):
                session.export_wav(io.BytesIO())

    def test_failed_decrypt_clears_previous_result(self):
        with CipherSession() as session:
            grid = session.encrypt(self.audio, PASSPHRASE)
            session.decrypt(grid, PASSPHRASE)
            with self.assertRaises(AuthenticationFailure):
                session.decrypt(grid, "not-the-key")
            self.assertIsNone(session.last_audio)

    def test_closed_session_refuses_work(self):
        session = CipherSession()
        session.close()
        session.close()
        with self.assertRaises(ResourceError):
            session.encrypt(self.audio, PASSPHRASE)
        with self.assertRaises(ResourceError):
            with session:
                pass

    def test_released_on_error(self):
        with self.assertRaises(InputError):
            with CipherSession() as session:
                session.encrypt(self.audio, "weak")
        self.assertTrue(session.closed)


if __name__ == "__main__":
    unittest.main()
