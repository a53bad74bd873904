import io
import tempfile
import unittest
from pathlib import Path

import numpy as np
import soundfile as sf

from audio_cipher.audio import AudioSamples, bytes_to_samples, read_audio, samples_to_bytes, write_wav
from audio_cipher.errors import FormatError, InputError, ResourceError


class AudioSamplesTests(unittest.TestCase):
    def test_coerces_to_float32(self):
        audio = AudioSamples([0.0, 0.5, -0.5], 8000)
        self.assertEqual(audio.samples.dtype, np.float32)
        self.assertEqual(len(audio), 3)
        self.assertAlmostEqual(audio.duration, 3 / 8000)

    def test_rejects_multichannel(self):
        with self.assertRaises(InputError):
            AudioSamples(np.zeros((10, 2), dtype=np.float32), 44100)

    def test_rejects_bad_rate(self):
        with self.assertRaises(InputError):
            AudioSamples(np.zeros(4, dtype=np.float32), 0)


class SampleBytesTests(unittest.TestCase):
    def test_little_endian_float32(self):
        self.assertEqual(samples_to_bytes(np.array([1.0], dtype=np.float32)), b"\x00\x00\x80\x3f")

    def test_bit_identical(self):
        values = np.array([0.0, -0.0, 1.0, -1.0, 1e-30, 0.333333, np.nextafter(np.float32(1), np.float32(0))], dtype=np.float32)
        restored = bytes_to_samples(samples_to_bytes(values))
        self.assertEqual(restored.tobytes(), values.tobytes())
        self.assertTrue(restored.flags.writeable)

    def test_partial_sample_rejected(self):
        with self.assertRaises(FormatError):
            bytes_to_samples(b"\x00" * 5)


class AudioFileTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_wav_export_is_16_bit(self):
        t = np.arange(800, dtype=np.float32) / 8000
        audio = AudioSamples(0.5 * np.sin(2 * np.pi * 440 * t), 8000)
        path = self.tmp_path / "tone.wav"
        write_wav(audio, path)
        info = sf.info(str(path))
        self.assertEqual(info.subtype, "PCM_16")
        self.assertEqual(info.samplerate, 8000)
        loaded = read_audio(path)
        np.testing.assert_allclose(loaded.samples, audio.samples, atol=2 / 32768)

    def test_export_clips(self):
        buf = io.BytesIO()
        write_wav(AudioSamples([2.0, -3.0], 8000), buf)
        buf.seek(0)
        loaded = read_audio(buf)
        self.assertTrue((np.abs(loaded.samples) <= 1.0).all())

    def test_first_channel_kept(self):
        stereo = np.stack([np.full(100, 0.25), np.full(100, -0.75)], axis=1).astype(np.float32)
        path = self.tmp_path / "stereo.wav"
        sf.write(str(path), stereo, 22050, subtype="FLOAT")
        loaded = read_audio(path)
        self.assertEqual(loaded.sample_rate, 22050)
        self.assertEqual(len(loaded), 100)
        self.assertTrue((loaded.samples == np.float32(0.25)).all())

    def test_unreadable_audio(self):
        with self.assertRaises(ResourceError):
            read_audio(io.BytesIO(b"definitely not audio"))


if __name__ == "__main__":
    unittest.main()
