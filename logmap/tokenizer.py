"""
Line tokenizer turning raw log lines into word sequences.
"""

import re
from typing import List


class LineTokenizer:
    """
    Splits log lines on punctuation used by common log formats.

    Leading columns (usually the timestamp) are dropped first, then purely
    numeric words when ``ignore_numeric_words`` is set.

    Note: the order matters. Columns are counted on the raw split, numeric
    words included, so ``"Sep 28 13:41:26 host"`` yields ``["host"]``.
    Dropping numeric words first would count ``Sep`` and ``host`` as the
    leading columns and yield nothing, and for a line like
    ``"Sep 16 08:15:02 AM kernel: ..."`` it would drop ``Sep AM`` instead of
    ``Sep 16``. The ``AM`` word therefore stays in the template.
    """

    DELIMITERS = " /,.:\"'(){}[]"

    def __init__(self, ignore_first_columns: int = 2, ignore_numeric_words: bool = True):
        self.ignore_first_columns = ignore_first_columns
        self.ignore_numeric_words = ignore_numeric_words
        self._split_pattern = re.compile("[" + re.escape(self.DELIMITERS) + "]+")

    def split(self, line: str) -> List[str]:
        """Split a line on delimiters, dropping empty tokens."""
        return [token for token in self._split_pattern.split(line) if token]

    @staticmethod
    def is_numeric_word(word: str) -> bool:
        """Check if word consists of digits, optionally mixed with '*' or '#'."""
        return all(c in "*#" or c.isnumeric() for c in word)

    def tokenize(self, line: str) -> List[str]:
        """Turn a raw line into the word sequence used for matching."""
        words = self.split(line)[self.ignore_first_columns:]
        if self.ignore_numeric_words:
            words = [word for word in words if not self.is_numeric_word(word)]
        return words
