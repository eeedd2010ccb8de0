"""
Online Log Template Discovery

A Python library that learns structural templates from a stream of log
lines and classifies new lines as known or novel.
"""

__version__ = "1.0.0"
__author__ = "Log Template Mapping System"

from .models import FilterSettings, TemplateRecord, OPTIONAL
from .tokenizer import LineTokenizer
from .store import TemplateStore
from .matching import TemplateMatcher
from .alignment import TemplateAligner
from .filters import LogFilters
from .io_utils import FilterStateError, JSONLWriter, JSONLReader

__all__ = [
    "FilterSettings",
    "TemplateRecord",
    "OPTIONAL",
    "LineTokenizer",
    "TemplateStore",
    "TemplateMatcher",
    "TemplateAligner",
    "LogFilters",
    "FilterStateError",
    "JSONLWriter",
    "JSONLReader"
]
