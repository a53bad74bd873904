import unittest

from audio_cipher.errors import InputError
from audio_cipher.strength import StrengthLevel, require_passphrase, score


class ScoreTests(unittest.TestCase):
    def test_shorter_than_six_is_too_short(self):
        for value in ("", "a", "Ab1!x"):
            result = score(value)
            self.assertEqual(result.level, StrengthLevel.TOO_SHORT)
            self.assertEqual(result.score, 0)
            self.assertFalse(result.allowed)

    def test_six_lowercase_letters_is_medium(self):
        result = score("abcdef")
        self.assertEqual(result.score, 2)
        self.assertEqual(result.level, StrengthLevel.MEDIUM)
        self.assertTrue(result.allowed)

    def test_long_passphrase_earns_length_point(self):
        self.assertEqual(score("ABCDEFGHIJK").score, 2)
        self.assertEqual(score("ABCDEFGHIJKL").score, 3)

    def test_each_character_class_adds_one(self):
        self.assertEqual(score("abcdef").score, 2)
        self.assertEqual(score("abcdeF").score, 3)
        self.assertEqual(score("abcdE1").score, 4)
        self.assertEqual(score("abcE1!").score, 5)

    def test_classic_example_is_strong(self):
        result = score("Tr0ub4dor&3")
        self.assertEqual(result.score, 5)
        self.assertEqual(result.level, StrengthLevel.STRONG)
        self.assertEqual(result.level.label, "Strong")

    def test_all_points(self):
        result = score("Correct-Horse-Battery-9")
        self.assertEqual(result.score, 6)
        self.assertEqual(result.level, StrengthLevel.STRONG)

    def test_non_ascii_counts_as_symbol(self):
        self.assertEqual(score("abcdeé").score, 3)


class RequirePassphraseTests(unittest.TestCase):
    def test_missing_passphrase_rejected(self):
        for value in (None, ""):
            with self.assertRaises(InputError):
                require_passphrase(value)

    def test_too_short_rejected_for_encryption(self):
        with self.assertRaises(InputError) as cm:
            require_passphrase("abc")
        self.assertIn("too weak", str(cm.exception))

    def test_strength_check_can_be_skipped(self):
        result = require_passphrase("wrong", check_strength=False)
        self.assertEqual(result.level, StrengthLevel.TOO_SHORT)

    def test_acceptable_passphrase_returns_score(self):
        self.assertEqual(require_passphrase("Tr0ub4dor&3").score, 5)


if __name__ == "__main__":
    unittest.main()
