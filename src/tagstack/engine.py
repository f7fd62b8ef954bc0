"""
Delimiter stack engine.

Wraps a `TemplateCompiler` and lets each template switch the delimiters used
for plain and escaped echos with an inline directive:

    changecontenttags('<%', '%>')
    changeescapedtags('<%%', '%%>')

Every applied pair is pushed onto the stack for its tag class. The first
element of a stack is the compiler's built-in pair, the last one is the
pair most recently applied, which is what an included template sees as
its parent's delimiters.
"""

from __future__ import annotations

import logging

from .compiler import TemplateCompiler
from .directives import ESCAPED_DIRECTIVE
from .directives import PLAIN_DIRECTIVE
from .directives import create_matcher
from .directives import match_directive
from .directives import parse_flag
from .types import DelimiterPair
from .types import EngineState
from .types import TagClass
from .types import TagStack

logger = logging.getLogger(__name__)


class DelimiterStackEngine:
    def __init__(
        self,
        compiler: TemplateCompiler | None = None,
        *,
        plain_keyword: str = PLAIN_DIRECTIVE,
        escaped_keyword: str = ESCAPED_DIRECTIVE,
    ) -> None:
        self.compiler = compiler if compiler is not None else TemplateCompiler()
        self.state = EngineState(
            plain_stack=TagStack(self.compiler.tags_for(TagClass.PLAIN)),
            escaped_stack=TagStack(self.compiler.tags_for(TagClass.ESCAPED)),
        )
        self._plain_matcher = create_matcher(plain_keyword)
        self._escaped_matcher = create_matcher(escaped_keyword)

    def compile_template(self, source: str) -> str:
        if self.state.revert:
            self._revert()

        value = self.filter_plain(source)
        value = self.filter_escaped(value)
        return self.compiler.compile_string(value)

    def filter_plain(self, source: str) -> str:
        match = match_directive(self._plain_matcher, source)
        if match is None:
            return source

        open_tag, close_tag, *rest = match.arguments
        escaped = parse_flag(rest[0]) if rest else False
        logger.debug("applying %s", match.text)
        self._apply(open_tag, close_tag, escaped)
        return match.source

    def filter_escaped(self, source: str) -> str:
        match = match_directive(self._escaped_matcher, source)
        if match is None:
            return source

        open_tag, close_tag, *rest = match.arguments
        if rest:
            # Validated only, the pair always goes to the escaped class.
            parse_flag(rest[0])
        logger.debug("applying %s", match.text)
        self._apply(open_tag, close_tag, True)
        return match.source

    def set_content_tags(
        self, open_tag: str, close_tag: str, escaped: bool = False
    ) -> None:
        self._apply(open_tag, close_tag, escaped)

    def set_escaped_content_tags(self, open_tag: str, close_tag: str) -> None:
        self._apply(open_tag, close_tag, True)

    def request_revert_to_defaults(self, flag: bool = True) -> None:
        """Use the default delimiters again, starting with the next compile."""
        self.state.revert = flag

    def default_plain_pair(self) -> DelimiterPair:
        return self.state.plain_stack.default

    def default_escaped_pair(self) -> DelimiterPair:
        return self.state.escaped_stack.default

    def parent_plain_pair(self) -> DelimiterPair:
        return self.state.plain_stack.parent

    def parent_escaped_pair(self) -> DelimiterPair:
        return self.state.escaped_stack.parent

    def _apply(self, open_tag: str, close_tag: str, escaped: bool) -> None:
        # The compiler validates the pair; only accepted pairs reach the stack.
        self.compiler.set_content_tags(open_tag, close_tag, escaped)
        tag_class = TagClass.ESCAPED if escaped else TagClass.PLAIN
        self.state.stack_for(tag_class).push(self.compiler.tags_for(tag_class))

    def _revert(self) -> None:
        state = self.state
        logger.debug(
            "reverting to default tags %s / %s",
            state.plain_stack.default,
            state.escaped_stack.default,
        )
        self._apply(*state.plain_stack.default, False)
        self._apply(*state.escaped_stack.default, True)
        state.revert = False

