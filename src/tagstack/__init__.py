"""
Per-template, stack-based interpolation delimiters for Django templates.
"""

from __future__ import annotations

from .compiler import TemplateCompiler
from .engine import DelimiterStackEngine
from .types import DelimiterPair
from .types import InvalidTagsError
from .types import TagClass

__all__ = [
    "DelimiterPair",
    "DelimiterStackEngine",
    "InvalidTagsError",
    "TagClass",
    "TemplateCompiler",
]
