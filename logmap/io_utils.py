"""
I/O utilities for persisted filter state, JSONL export, and scan reports.

Persisted state is a plain text file: four header lines (allowed new
alternatives, optional marker, ignore-numeric flag, ignored leading
columns) followed by one template per line, e.g.::

    [kernel],[wlp2s0],[authenticated,.],
    [host]
"""

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterator, List

from .filters import LogFilters
from .models import FilterSettings, TemplateRecord, Column, OPTIONAL
from .store import TemplateStore

logger = logging.getLogger(__name__)

HEADER_LINES = 4


class FilterStateError(ValueError):
    """Raised when persisted filter state cannot be parsed."""


def dump_state(filters: LogFilters) -> str:
    """Render settings and templates in the persisted text layout."""
    settings = filters.settings
    header = [
        str(settings.max_allowed_new_alternatives),
        settings.optional_marker,
        "true" if settings.ignore_numeric_words else "false",
        str(settings.ignore_first_columns),
    ]
    return "\n".join(header) + "\n" + filters.to_string()


def _parse_uint(value: str, position: str) -> int:
    if not value.isdecimal():
        raise FilterStateError(f"Couldn't parse {position} line of input to unsigned integer: {value!r}")
    return int(value)


def parse_settings(lines: List[str]) -> FilterSettings:
    """Parse the header lines of a persisted state."""
    if len(lines) < HEADER_LINES + 1:
        raise FilterStateError(
            f"File is corrupted! At least {HEADER_LINES + 1} lines expected, found {len(lines)}")

    optional_marker = lines[1]
    if not optional_marker:
        raise FilterStateError("2nd line of input cannot be empty!")
    if lines[2] not in ("true", "false"):
        raise FilterStateError(f"Couldn't parse 3rd line of input to boolean: {lines[2]!r}")

    return FilterSettings(
        max_allowed_new_alternatives=_parse_uint(lines[0], "1st"),
        optional_marker=optional_marker,
        ignore_numeric_words=lines[2] == "true",
        ignore_first_columns=_parse_uint(lines[3], "4th"),
    )


def parse_template(line: str, optional_marker: str) -> List[Column]:
    """Parse one ``[a,b],[c]`` template line."""
    columns = []
    for group in line.replace("]", "[").split("["):
        if not group or group == ",":
            continue
        columns.append([
            OPTIONAL if word == optional_marker else word
            for word in group.split(",") if word
        ])
    return columns


def parse_state(text: str) -> LogFilters:
    """
    Rebuild filters from persisted text.

    Raises:
        FilterStateError: if the header is malformed. Nothing is returned
            in that case.
    """
    lines = text.split("\n")
    settings = parse_settings(lines)
    store = TemplateStore()
    for line in lines[HEADER_LINES:]:
        if "[" not in line or "]" not in line:
            continue
        store.add_template(parse_template(line, settings.optional_marker))
    return LogFilters(settings=settings, store=store)


def save_filters(filters: LogFilters, path: str) -> None:
    """Write filters to a file in the persisted text layout."""
    file_path = Path(path)
    try:
        file_path.write_text(dump_state(filters), encoding="utf-8")
    except OSError as e:
        raise FilterStateError(f"Couldn't write to {file_path}: {e}") from e


def load_filters(path: str) -> LogFilters:
    """Read filters previously written by ``save_filters``."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise FilterStateError(f"Couldn't open {file_path}: {e}") from e
    return parse_state(text)


class JSONLWriter:
    """
    Writer for JSONL (JSON Lines) template exports.
    """

    def __init__(self, file_path: str):
        self.file_path = Path(file_path)
        self.file_handle = None

    def __enter__(self):
        self.file_handle = open(self.file_path, 'w', encoding='utf-8')
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.file_handle:
            self.file_handle.close()

    def write_record(self, record: TemplateRecord) -> None:
        """Write a single template record."""
        if not self.file_handle:
            raise ValueError("JSONLWriter not opened")

        json.dump(record.to_dict(), self.file_handle, ensure_ascii=False)
        self.file_handle.write('\n')

    def write_records(self, records: List[TemplateRecord]) -> None:
        for record in records:
            self.write_record(record)


class JSONLReader:
    """
    Reader for JSONL template exports.
    """

    def __init__(self, file_path: str):
        self.file_path = Path(file_path)

    def read_records(self) -> List[TemplateRecord]:
        """Read all template records from the JSONL file."""
        return list(self)

    def __iter__(self) -> Iterator[TemplateRecord]:
        if not self.file_path.exists():
            return

        with open(self.file_path, 'r', encoding='utf-8') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    yield TemplateRecord.from_dict(json.loads(line))
                except (json.JSONDecodeError, KeyError, TypeError) as e:
                    logger.warning("Skipping invalid template record at line %d: %s", line_num, e)


class ScanReport:
    """
    Counts what happened to the lines fed through the CLI.
    """

    def __init__(self, max_unknown_samples: int = 20):
        self.learned_lines = 0
        self.created_templates = 0
        self.known_lines = 0
        self.unknown_lines = 0
        self.template_usage: Dict[int, int] = defaultdict(int)
        self.unknown_samples: List[str] = []
        self.max_unknown_samples = max_unknown_samples

    def add_learned(self, templates_before: int, templates_after: int) -> None:
        self.learned_lines += 1
        self.created_templates += templates_after - templates_before

    def add_known(self, template_id: int) -> None:
        self.known_lines += 1
        self.template_usage[template_id] += 1

    def add_unknown(self, line: str) -> None:
        self.unknown_lines += 1
        if len(self.unknown_samples) < self.max_unknown_samples:
            self.unknown_samples.append(line[:200])

    def get_summary(self) -> Dict:
        scanned = self.known_lines + self.unknown_lines
        return {
            'learned_lines': self.learned_lines,
            'created_templates': self.created_templates,
            'scanned_lines': scanned,
            'known_lines': self.known_lines,
            'unknown_lines': self.unknown_lines,
            'known_rate': (self.known_lines / scanned * 100) if scanned else 0.0,
            'top_templates': sorted(self.template_usage.items(), key=lambda x: x[1], reverse=True)[:10],
            'unknown_samples': self.unknown_samples[:20],
        }
