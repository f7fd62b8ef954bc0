"""
Settings for the Django integration.

Read from the optional `TAGSTACK` dict in Django settings:

    TAGSTACK = {
        "CONTENT_TAGS": ("{{", "}}"),
        "ESCAPED_TAGS": ("{{{", "}}}"),
        "PLAIN_DIRECTIVE": "changecontenttags",
        "ESCAPED_DIRECTIVE": "changeescapedtags",
        "REVERT_TAGS": False,
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .compiler import DEFAULT_CONTENT_TAGS
from .compiler import DEFAULT_ESCAPED_TAGS
from .compiler import TemplateCompiler
from .compiler import validate_pair
from .directives import ESCAPED_DIRECTIVE
from .directives import PLAIN_DIRECTIVE
from .engine import DelimiterStackEngine
from .types import DelimiterPair
from .types import InvalidTagsError

_KEYS = {
    "CONTENT_TAGS": "content_tags",
    "ESCAPED_TAGS": "escaped_tags",
    "PLAIN_DIRECTIVE": "plain_directive",
    "ESCAPED_DIRECTIVE": "escaped_directive",
    "REVERT_TAGS": "revert_tags",
}


@dataclass(frozen=True)
class TagstackSettings:
    content_tags: DelimiterPair = DEFAULT_CONTENT_TAGS
    escaped_tags: DelimiterPair = DEFAULT_ESCAPED_TAGS
    plain_directive: str = PLAIN_DIRECTIVE
    escaped_directive: str = ESCAPED_DIRECTIVE
    revert_tags: bool = False

    @classmethod
    def from_django(cls) -> TagstackSettings:
        options: dict[str, Any] = getattr(settings, "TAGSTACK", None) or {}

        unknown = sorted(set(options) - set(_KEYS))
        if unknown:
            raise ImproperlyConfigured(
                f"Unknown TAGSTACK setting(s): {', '.join(unknown)}"
            )

        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            if key in ("CONTENT_TAGS", "ESCAPED_TAGS"):
                value = _pair(key, value)
            elif key == "REVERT_TAGS":
                if not isinstance(value, bool):
                    raise ImproperlyConfigured(
                        f"TAGSTACK[{key!r}] must be True or False"
                    )
            elif not isinstance(value, str) or not value:
                raise ImproperlyConfigured(
                    f"TAGSTACK[{key!r}] must be a non-empty string"
                )
            kwargs[_KEYS[key]] = value
        return cls(**kwargs)

    def build_engine(self) -> DelimiterStackEngine:
        compiler = TemplateCompiler(
            content_tags=self.content_tags,
            escaped_tags=self.escaped_tags,
        )
        return DelimiterStackEngine(
            compiler,
            plain_keyword=self.plain_directive,
            escaped_keyword=self.escaped_directive,
        )


def _pair(key: str, value: Any) -> DelimiterPair:
    if isinstance(value, DelimiterPair):
        return value
    try:
        open_tag, close_tag = value
        return validate_pair(open_tag, close_tag)
    except (TypeError, ValueError, InvalidTagsError) as exc:
        raise ImproperlyConfigured(
            f"TAGSTACK[{key!r}] must be an (open, close) pair of non-empty strings"
        ) from exc
