"""
Incremental alignment of a word sequence into an existing template.

The aligner walks the words and the template columns together, anchoring
on the earliest word that occurs in the template. Unmatched leading words
become new optional columns, unmatched leading columns become optional,
and the remaining gaps receive the words as new alternatives. A trailing
mismatch is repaired by running the same step on the reversed sequences.
"""

import logging
from typing import List, Optional, Tuple

from .models import OPTIONAL
from .store import TemplateStore

logger = logging.getLogger(__name__)

Boundary = Tuple[int, int]


class TemplateAligner:
    """Mutates templates in a store so they also accept new word sequences."""

    def __init__(self, store: TemplateStore):
        self.store = store

    def earliest_matching_word(self, words: List[str], template_id: int,
                               word_offset: int, column_offset: int) -> Optional[Boundary]:
        """
        Find the word matching the lowest template column.

        Every word at or after ``word_offset`` is looked up in the columns at
        or after ``column_offset``; ties keep the earlier word.

        Returns:
            ``(word_index, column_index)`` or None if no word matches.
        """
        template = self.store.get(template_id)
        if template is None or word_offset >= len(words) or column_offset >= len(template):
            return None

        earliest = None
        for word_index in range(word_offset, len(words)):
            column_index = self.store.find_column(template_id, words[word_index], column_offset)
            if column_index is not None and (earliest is None or column_index < earliest[1]):
                earliest = (word_index, column_index)
        return earliest

    def align_from(self, words: List[str], template_id: int,
                   word_offset: int, column_offset: int) -> Optional[Boundary]:
        """
        Reconcile words and columns up to the next anchoring match.

        Returns:
            The anchoring ``(word_index, column_index)`` after the template
            was updated, or None when nothing in the remaining words matches.
        """
        anchor = self.earliest_matching_word(words, template_id, word_offset, column_offset)
        if anchor is None:
            return None

        word_index, column_index = anchor
        shift = column_offset - word_offset
        leading_words = words[word_offset:word_index]

        if word_index + shift > column_index:
            # more leading words than columns: each becomes an optional column
            self.store.insert_columns(
                template_id, column_index, [[word, OPTIONAL] for word in leading_words])
            return word_index, column_index + len(leading_words)

        # Columns without a word are optional, the rest take the words in order.
        first_filled = column_index - len(leading_words)
        for position in range(column_offset, first_filled):
            self.store.add_alternative(template_id, position, OPTIONAL)
        for position, word in zip(range(first_filled, column_index), leading_words):
            self.store.add_alternative(template_id, position, word)
        return word_index, column_index

    def update_template(self, words: List[str], template_id: int) -> None:
        """Merge a word sequence into the template it was matched to."""
        if template_id not in self.store or not words:
            return

        boundary = self.align_from(words, template_id, 0, 0)
        if boundary is None:
            logger.warning("Matched template %d does not align with words %s",
                           template_id, words)
            return

        word_index, column_index = boundary
        while word_index < len(words):
            next_boundary = self.align_from(words, template_id, word_index, column_index)
            if next_boundary is None:
                break
            if next_boundary != (word_index, column_index):
                word_index, column_index = next_boundary
                continue
            # stalled on an aligned pair, step past it
            if word_index == len(words) - 1:
                break
            if column_index == len(self.store.templates[template_id]) - 1:
                break
            word_index += 1
            column_index += 1

        width = len(self.store.templates[template_id])
        if len(words) > width and column_index == width - 1:
            for word in words[width:]:
                self.store.append_column(template_id, [word, OPTIONAL])
        elif word_index < len(words):
            self._align_suffix(words, template_id)

    def _align_suffix(self, words: List[str], template_id: int) -> None:
        """Run one alignment step on the reversed words and template."""
        self.store.reverse_template(template_id)
        try:
            self.align_from(words[::-1], template_id, 0, 0)
        finally:
            self.store.reverse_template(template_id)
