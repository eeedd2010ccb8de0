"""
Tests for the log line tokenizer.
"""

import unittest
from logmap.tokenizer import LineTokenizer


class TestLineSplit(unittest.TestCase):
    """Test splitting on delimiters."""

    def setUp(self):
        self.tokenizer = LineTokenizer(ignore_first_columns=0, ignore_numeric_words=False)

    def test_split(self):
        test_cases = [
            ("a b/c,d.e:f\"g'h(i)j{k}l[m]n",
             ["a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m", "n"]),
            (" /,.a:\"'()b{}[]", ["a", "b"]),
            (" /,.:\"'(){}[]", []),
            ("", []),
            ("LoremIpsum", ["LoremIpsum"]),
            ("systemd-logind[572]:", ["systemd-logind", "572"]),
        ]

        for line, expected in test_cases:
            with self.subTest(line=line):
                self.assertEqual(self.tokenizer.split(line), expected)

    def test_tokenize_without_dropping(self):
        line = "a b/c,d.e:f\"g'h(i)j{k}l[m]n"
        self.assertEqual(self.tokenizer.tokenize(line), self.tokenizer.split(line))


class TestTokenize(unittest.TestCase):
    """Test leading column and numeric word removal."""

    def test_ignore_first_columns(self):
        tokenizer = LineTokenizer(ignore_first_columns=2, ignore_numeric_words=False)
        test_cases = [
            ("a b/c,d.e:f\"g'h(i)j{k}l[m]n",
             ["c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m", "n"]),
            (" /,.a:\"'()b{}[]c[]{}.,", ["c"]),
            (" /,.:\"'(){}[]", []),
            ("", []),
            ("Lorem ipsum dolor sit amet, 123 consectetur adipiscing elit7",
             ["dolor", "sit", "amet", "123", "consectetur", "adipiscing", "elit7"]),
        ]

        for line, expected in test_cases:
            with self.subTest(line=line):
                self.assertEqual(tokenizer.tokenize(line), expected)

    def test_ignore_numeric_words(self):
        tokenizer = LineTokenizer(ignore_first_columns=2, ignore_numeric_words=True)
        line = "Lorem ipsum dolor sit amet, 123 consectetur adipiscing elit7"
        self.assertEqual(tokenizer.tokenize(line),
                         ["dolor", "sit", "amet", "consectetur", "adipiscing", "elit7"])

    def test_leading_columns_dropped_before_numeric_words(self):
        tokenizer = LineTokenizer(ignore_first_columns=2, ignore_numeric_words=True)
        self.assertEqual(
            tokenizer.tokenize("Sep 26 09:13:15 host systemd-logind[572]: Removed session c524."),
            ["host", "systemd-logind", "Removed", "session", "c524"])
        self.assertEqual(tokenizer.tokenize("Sep 28 13:41:26 host"), ["host"])
        self.assertEqual(tokenizer.tokenize("Sep 16 08:15:02 AM kernel: wlp2s0: authenticated"),
                         ["AM", "kernel", "wlp2s0", "authenticated"])

    def test_is_numeric_word(self):
        test_cases = [
            ("asdf", False),
            ("123a", False),
            ("a123", False),
            ("6789", True),
            ("*6789", True),
            ("#6789", True),
            ("6789*6789", True),
            ("6789#6789", True),
            ("", True),
        ]

        for word, expected in test_cases:
            with self.subTest(word=word):
                self.assertEqual(LineTokenizer.is_numeric_word(word), expected)


if __name__ == '__main__':
    unittest.main()
