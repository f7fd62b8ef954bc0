"""
Blade-style template compiler targeting the Django template language.

Echo expressions written with the active delimiters become DTL variable
tokens; DTL block tags (`{% ... %}`) are left for Django to handle:

- `{{ expr }}`   -> `{{ expr|safe }}`
- `{{{ expr }}}` -> `{{ expr|escape }}`
- `@{{ expr }}`, `@{{{ expr }}}` -> the echo itself, inside `{% verbatim %}`
- `{{-- ... --}}` is dropped

Stray `{{` / `}}` that are not part of an echo are emitted through
`{% templatetag %}` so they render literally once other delimiters are active.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from .types import DelimiterPair
from .types import InvalidTagsError
from .types import TagClass

logger = logging.getLogger(__name__)

CompileStep = Callable[[str], str]

DEFAULT_CONTENT_TAGS = DelimiterPair("{{", "}}")
DEFAULT_ESCAPED_TAGS = DelimiterPair("{{{", "}}}")

_LITERAL_BRACES = {
    "{{": "{% templatetag openvariable %}",
    "}}": "{% templatetag closevariable %}",
}


class TemplateCompiler:
    def __init__(
        self,
        *,
        content_tags: DelimiterPair | tuple[str, str] = DEFAULT_CONTENT_TAGS,
        escaped_tags: DelimiterPair | tuple[str, str] = DEFAULT_ESCAPED_TAGS,
    ) -> None:
        self.content_tags = validate_pair(*content_tags)
        self.escaped_tags = validate_pair(*escaped_tags)
        self.extensions: list[CompileStep] = []
        self.compilers: list[CompileStep] = [
            self.compile_extensions,
            self.compile_comments,
            self.compile_echos,
        ]

    def set_content_tags(
        self, open_tag: str, close_tag: str, escaped: bool = False
    ) -> None:
        pair = validate_pair(open_tag, close_tag)
        if escaped:
            self.escaped_tags = pair
        else:
            self.content_tags = pair

    def set_escaped_content_tags(self, open_tag: str, close_tag: str) -> None:
        self.set_content_tags(open_tag, close_tag, escaped=True)

    def tags_for(self, tag_class: TagClass) -> DelimiterPair:
        if tag_class is TagClass.ESCAPED:
            return self.escaped_tags
        return self.content_tags

    def pattern_for(self, tag_class: TagClass) -> re.Pattern[str]:
        """
        Matcher for echos of *tag_class* using the currently active pair.

        Groups are named after the class: `plain`, `plain_at` and `plain_expr`
        (or `escaped`, `escaped_at`, `escaped_expr`).
        """
        return re.compile(self._echo_source(tag_class), re.DOTALL)

    def extend(self, compiler: CompileStep) -> None:
        """Register a custom compiler, run before the built-in ones."""
        logger.debug("registered compiler %r", compiler)
        self.extensions.append(compiler)

    def compile_string(self, value: str) -> str:
        for compiler in self.compilers:
            value = compiler(value)
        return value

    def compile_extensions(self, value: str) -> str:
        for compiler in self.extensions:
            value = compiler(value)
        return value

    def compile_comments(self, value: str) -> str:
        open_tag, close_tag = self.content_tags
        pattern = rf"{re.escape(open_tag)}--(.*?)--{re.escape(close_tag)}"
        return re.sub(pattern, "", value, flags=re.DOTALL)

    def compile_echos(self, value: str) -> str:
        return self._echo_pattern().sub(self._replace_echo, value)

    def _echo_source(self, tag_class: TagClass) -> str:
        open_tag, close_tag = self.tags_for(tag_class)
        name = tag_class.name.lower()
        return (
            rf"(?P<{name}>(?P<{name}_at>@)?{re.escape(open_tag)}"
            rf"\s*(?P<{name}_expr>.+?)\s*{re.escape(close_tag)})"
        )

    def _echo_pattern(self) -> re.Pattern[str]:
        # The longer opener has to win, `{{{` would otherwise match as `{{`.
        if len(self.content_tags.open) > len(self.escaped_tags.open):
            order = [TagClass.PLAIN, TagClass.ESCAPED]
        else:
            order = [TagClass.ESCAPED, TagClass.PLAIN]
        branches = [self._echo_source(tag_class) for tag_class in order]
        branches.append(r"(?P<literal>\{\{|\}\})")
        return re.compile("|".join(branches), re.DOTALL)

    @staticmethod
    def _replace_echo(match: re.Match[str]) -> str:
        literal = match.group("literal")
        if literal:
            return _LITERAL_BRACES[literal]
        name = "escaped" if match.group("escaped") is not None else "plain"
        if match.group(f"{name}_at"):
            return "{% verbatim %}" + match.group(name)[1:] + "{% endverbatim %}"
        if name == "escaped":
            return "{{ " + match.group("escaped_expr") + "|escape }}"
        return "{{ " + match.group("plain_expr") + "|safe }}"


def validate_pair(open_tag: str, close_tag: str) -> DelimiterPair:
    for tag in (open_tag, close_tag):
        if not isinstance(tag, str) or not tag.strip():
            raise InvalidTagsError(
                f"delimiters must be non-empty strings, got {open_tag!r}, {close_tag!r}"
            )
    return DelimiterPair(open_tag, close_tag)
