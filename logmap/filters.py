"""
Public entry point: learn templates from log lines and classify new ones.
"""

from typing import Dict, List, Optional

from .alignment import TemplateAligner
from .matching import TemplateMatcher
from .models import FilterSettings, Column, TemplateRecord, OPTIONAL
from .store import TemplateStore
from .tokenizer import LineTokenizer


class LogFilters:
    """
    Online template learner.

    Each learned line either merges into its best matching template or
    creates a new one. ``is_known`` runs the same matching without mutating
    anything.
    """

    def __init__(self, settings: Optional[FilterSettings] = None,
                 store: Optional[TemplateStore] = None):
        self.settings = settings if settings is not None else FilterSettings()
        self.store = store if store is not None else TemplateStore()
        self.matcher = TemplateMatcher(self.store, self.settings)
        self.aligner = TemplateAligner(self.store)

    @property
    def tokenizer(self) -> LineTokenizer:
        # settings may be changed after construction
        return LineTokenizer(self.settings.ignore_first_columns,
                             self.settings.ignore_numeric_words)

    @property
    def templates(self) -> List[List[Column]]:
        return self.store.templates

    @property
    def template_count(self) -> int:
        return len(self.store)

    def line_to_words(self, line: str) -> List[str]:
        return self.tokenizer.tokenize(line)

    def learn(self, line: str) -> None:
        """Fold a line into the template set."""
        self.learn_words(self.line_to_words(line))

    def learn_words(self, words: List[str]) -> None:
        template_id = self.matcher.find_best_match(words)
        if template_id is not None:
            self.aligner.update_template(words, template_id)
        else:
            self.add_template(words)

    def is_known(self, line: str) -> bool:
        """Check if a line matches any learned template."""
        return self.matcher.find_best_match(self.line_to_words(line)) is not None

    def add_template(self, words: List[str]) -> Optional[int]:
        """Create a template with one single-word column per word."""
        columns = [[word] for word in words if word]
        if not columns:
            return None
        return self.store.add_template(columns)

    def render_column(self, column: Column) -> List[str]:
        marker = self.settings.optional_marker
        return [marker if alternative is OPTIONAL else alternative for alternative in column]

    def records(self) -> List[TemplateRecord]:
        return [
            TemplateRecord(
                template_id=template_id,
                columns=[self.render_column(column) for column in template],
                optional_columns=self.store.optional_column_count(template_id),
            )
            for template_id, template in enumerate(self.store)
        ]

    def to_string(self) -> str:
        """Templates as ``[a,b],[c]`` lines joined by ``",\\n"``."""
        return ",\n".join(str(record) for record in self.records())

    def dump(self) -> List[str]:
        """Human readable lines describing templates and the reverse index."""
        lines = [str(record.columns) for record in self.records()]
        if not lines:
            lines.append("No filters added yet")
        lines.append("")
        index: Dict[str, List[int]] = self.store.index
        if index:
            lines.extend(f"{word} : {index[word]}" for word in sorted(index))
        else:
            lines.append("No words with references to filters added yet")
        return lines

    def __str__(self) -> str:
        return self.to_string()

    def save(self, path: str) -> None:
        from .io_utils import save_filters
        save_filters(self, path)

    @classmethod
    def load(cls, path: str) -> "LogFilters":
        from .io_utils import load_filters
        return load_filters(path)
