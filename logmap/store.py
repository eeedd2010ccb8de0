"""
Append-only template store with a word -> template id reverse index.

Templates are plain lists of columns addressed by their integer id (the
creation order). The reverse index maps every concrete alternative to the
sorted ids of the templates currently containing it.
"""

from bisect import insort
from typing import Dict, Iterator, List, Optional

from .models import OPTIONAL, Column


class TemplateStore:
    """
    Owns every template and the reverse index over their alternatives.

    Ids handed out by the store stay valid forever since templates are
    never removed or reordered.
    """

    def __init__(self):
        self.templates: List[List[Column]] = []
        self.index: Dict[str, List[int]] = {}

    def __len__(self) -> int:
        return len(self.templates)

    def __iter__(self) -> Iterator[List[Column]]:
        return iter(self.templates)

    def __contains__(self, template_id: int) -> bool:
        return 0 <= template_id < len(self.templates)

    def get(self, template_id: int) -> Optional[List[Column]]:
        """Return the columns of a template or None for unknown ids."""
        if template_id not in self:
            return None
        return self.templates[template_id]

    def add_template(self, columns: List[Column]) -> int:
        """Append a template and index all of its concrete alternatives."""
        template_id = len(self.templates)
        self.templates.append(columns)
        for column in columns:
            for alternative in column:
                if alternative is not OPTIONAL:
                    self.index_word(alternative, template_id)
        return template_id

    def contains_word(self, template_id: int, word: str) -> bool:
        """Check if any column of the template accepts the word."""
        template = self.get(template_id)
        if template is None or not word:
            return False
        return any(word in column for column in template)

    def index_word(self, word: str, template_id: int) -> None:
        """Register (word, template_id) if the template really holds the word."""
        if not self.contains_word(template_id, word):
            return
        template_ids = self.index.setdefault(word, [])
        if template_id not in template_ids:
            insort(template_ids, template_id)

    def lookup(self, word: str) -> List[int]:
        """Ids of templates containing the word, ascending."""
        return self.index.get(word, [])

    def find_column(self, template_id: int, word: str, start: int = 0) -> Optional[int]:
        """First column at or after ``start`` accepting the word."""
        if not word or template_id not in self.lookup(word):
            return None
        template = self.templates[template_id]
        for column_index in range(start, len(template)):
            if word in template[column_index]:
                return column_index
        return None

    def optional_column_count(self, template_id: int) -> int:
        template = self.get(template_id)
        if template is None:
            return 0
        return sum(1 for column in template if OPTIONAL in column)

    def add_alternative(self, template_id: int, column_index: int, alternative) -> None:
        """Add an alternative to a column unless it is already there."""
        column = self.templates[template_id][column_index]
        if alternative not in column:
            column.append(alternative)
        if alternative is not OPTIONAL:
            self.index_word(alternative, template_id)

    def insert_columns(self, template_id: int, position: int, columns: List[Column]) -> None:
        """Insert new columns before ``position`` and index their words."""
        template = self.templates[template_id]
        template[position:position] = columns
        for column in columns:
            for alternative in column:
                if alternative is not OPTIONAL:
                    self.index_word(alternative, template_id)

    def append_column(self, template_id: int, column: Column) -> None:
        self.insert_columns(template_id, len(self.templates[template_id]), [column])

    def reverse_template(self, template_id: int) -> None:
        """Reverse the column order of a template in place."""
        self.templates[template_id].reverse()
