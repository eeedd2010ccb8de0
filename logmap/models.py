"""
Core data models for incremental log template discovery.
"""

from dataclasses import dataclass, field
from typing import List, Union
from dataclasses_json import dataclass_json
from enum import Enum


class OptionalMarker(Enum):
    """Alternative meaning a column may be skipped entirely."""
    OPTIONAL = "optional"

    def __repr__(self) -> str:
        return "OPTIONAL"


OPTIONAL = OptionalMarker.OPTIONAL

# A column holds concrete words and, at most once, the OPTIONAL marker.
Alternative = Union[str, OptionalMarker]
Column = List[Alternative]


@dataclass_json
@dataclass
class FilterSettings:
    """Tunables shared by the tokenizer, matcher and persisted state."""
    max_allowed_new_alternatives: int = 0
    optional_marker: str = "."  # only used when rendering OPTIONAL as text
    ignore_numeric_words: bool = True
    ignore_first_columns: int = 2


@dataclass_json
@dataclass
class TemplateRecord:
    """A template flattened for export."""
    template_id: int
    columns: List[List[str]]
    optional_columns: int = 0

    def __str__(self) -> str:
        return ",".join("[" + ",".join(column) + "]" for column in self.columns)


@dataclass
class MatchResult:
    """Outcome of scoring every candidate template against a word sequence."""
    template_id: int = -1
    score: int = 0
    candidates: List[int] = field(default_factory=list)
    tied_ids: List[int] = field(default_factory=list)
    accepted: bool = False

    @property
    def is_ambiguous(self) -> bool:
        return self.accepted and len(self.tied_ids) > 1

    def __str__(self) -> str:
        return (f"Match(template_id={self.template_id}, score={self.score}, "
                f"accepted={self.accepted}, ties={self.tied_ids})")
