"""
Candidate selection and ordered-match scoring of word sequences.

Candidates are shortlisted from the reverse index by counting how many of
the line's words each template contains, then scored by counting the words
found at strictly increasing columns of the template.
"""

import logging
from itertools import groupby
from typing import List, Optional

from .models import FilterSettings, MatchResult
from .store import TemplateStore

logger = logging.getLogger(__name__)


class TemplateMatcher:
    """
    Finds the template a word sequence belongs to.

    ``max_allowed_new_alternatives`` bounds how many words of a line may
    have no counterpart in the chosen template.
    """

    def __init__(self, store: TemplateStore, settings: FilterSettings):
        self.store = store
        self.settings = settings

    @property
    def allowed(self) -> int:
        return self.settings.max_allowed_new_alternatives

    def occurrences(self, words: List[str]) -> List[int]:
        """Template ids for every word occurrence, sorted, duplicates kept."""
        template_ids = []
        for word in words:
            template_ids.extend(self.store.lookup(word))
        template_ids.sort()
        return template_ids

    def select_candidates(self, words: List[str]) -> List[int]:
        """
        Shortlist templates containing enough of the words.

        A template qualifies when its occurrence count reaches both
        ``len(words) - allowed`` and ``len(template) - allowed - optional``.
        """
        candidates = []
        for template_id, group in groupby(self.occurrences(words)):
            count = sum(1 for _ in group)
            template = self.store.templates[template_id]
            required = max(
                1,
                len(words) - self.allowed,
                len(template) - self.allowed - self.store.optional_column_count(template_id),
            )
            if count >= required:
                candidates.append(template_id)
        return candidates

    def count_consequent_matches(self, words: List[str], template_id: int) -> int:
        """
        Count words found at strictly increasing columns of the template.

        Returns 0 as soon as the number of unmatched words exceeds the
        allowance, which grows by how much longer the line is than the
        template.
        """
        template = self.store.get(template_id)
        if template is None or not words:
            return 0

        extra_allowed = max(0, len(words) - len(template))
        matches = 0
        new_alternatives = 0
        last_column = -1
        for word in words:
            column = self.store.find_column(template_id, word, last_column + 1)
            if column is not None:
                last_column = column
                matches += 1
            else:
                new_alternatives += 1
                if new_alternatives > self.allowed + extra_allowed:
                    return 0
        return matches

    def evaluate(self, words: List[str]) -> MatchResult:
        """Score every candidate and decide whether the best one is accepted."""
        result = MatchResult()
        if not len(self.store) or not words:
            return result

        result.candidates = self.select_candidates(words)
        for template_id in result.candidates:
            score = self.count_consequent_matches(words, template_id)
            if score > result.score:
                result.template_id = template_id
                result.score = score
                result.tied_ids = [template_id]
            elif score and score == result.score:
                result.tied_ids.append(template_id)

        result.accepted = (result.template_id >= 0
                           and result.score >= len(words) - self.allowed)
        if result.is_ambiguous:
            logger.warning(
                "More than one matching template found. Words: %s; Templates: %s",
                words, [self.store.templates[i] for i in result.tied_ids])
        return result

    def find_best_match(self, words: List[str]) -> Optional[int]:
        """Id of the accepted best template, or None when the line is novel."""
        result = self.evaluate(words)
        if not result.accepted:
            return None
        return result.template_id
