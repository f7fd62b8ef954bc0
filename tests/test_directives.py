"""Unit tests for delimiter directive matching."""

from __future__ import annotations

import pytest

from tagstack.directives import PLAIN_DIRECTIVE
from tagstack.directives import _split_unquoted
from tagstack.directives import _strip_argument
from tagstack.directives import create_matcher
from tagstack.directives import match_directive
from tagstack.directives import parse_flag
from tagstack.types import InvalidTagsError


@pytest.fixture
def matcher():
    return create_matcher(PLAIN_DIRECTIVE)


class TestMatchDirective:
    def test_no_directive(self, matcher):
        assert match_directive(matcher, "Hello {{ name }}") is None

    def test_single_quotes(self, matcher):
        match = match_directive(matcher, "changecontenttags('<%','%>') Hello <%name%>")
        assert match is not None
        assert match.arguments == ("<%", "%>")
        assert match.source == " Hello <%name%>"
        assert match.text == "changecontenttags('<%','%>')"

    def test_double_quotes_and_whitespace(self, matcher):
        match = match_directive(matcher, 'changecontenttags( "[[" ,  "]]" )\n[[x]]')
        assert match is not None
        assert match.arguments == ("[[", "]]")
        assert match.source == "\n[[x]]"

    def test_bare_third_argument(self, matcher):
        match = match_directive(matcher, "changecontenttags('<<', '>>', true)")
        assert match is not None
        assert match.arguments == ("<<", ">>", "true")
        assert match.source == ""

    def test_quoted_third_argument(self, matcher):
        match = match_directive(matcher, "changecontenttags('<<', '>>', 'false')")
        assert match is not None
        assert match.arguments == ("<<", ">>", "false")

    def test_comma_inside_quotes(self, matcher):
        match = match_directive(matcher, "changecontenttags(',(', '),')")
        assert match is not None
        assert match.arguments == (",(", "),")

    def test_only_first_directive_consumed(self, matcher):
        source = "changecontenttags('<%','%>')a changecontenttags('[[',']]')b"
        match = match_directive(matcher, source)
        assert match is not None
        assert match.arguments == ("<%", "%>")
        assert match.source == "a changecontenttags('[[',']]')b"

    def test_directive_in_the_middle(self, matcher):
        match = match_directive(matcher, "<p>changecontenttags('<%','%>')</p>")
        assert match is not None
        assert match.source == "<p></p>"

    @pytest.mark.parametrize(
        "source",
        [
            "changecontenttags('<%')",
            "changecontenttags(<%, %>)",
            "changecontenttags ('<%', '%>')",
            "changecontenttags('a', 'b', 'c', 'd')",
            "xchangecontenttags('<%', '%>')",
            "changecontenttags('<%', '%>'",
        ],
    )
    def test_malformed_passes_through(self, matcher, source):
        assert match_directive(matcher, source) is None

    def test_custom_keyword(self):
        matcher = create_matcher("@tags")
        match = match_directive(matcher, "@tags('<%', '%>')x")
        assert match is not None
        assert match.arguments == ("<%", "%>")
        assert match.source == "x"

    def test_empty_keyword_rejected(self):
        with pytest.raises(ValueError):
            create_matcher("")


class TestStripArgument:
    def test_strips_quotes_and_whitespace(self):
        assert _strip_argument(" ' <% ' ") == "<%"

    def test_mismatched_quotes_kept(self):
        assert _strip_argument("'a\"") == "'a\""

    def test_bare_word(self):
        assert _strip_argument(" true ") == "true"


def test_split_unquoted_respects_quotes():
    assert _split_unquoted("'a,b', \"c\"", ",") == ["'a,b'", ' "c"']


class TestParseFlag:
    @pytest.mark.parametrize("token", ["true", "TRUE", "1", "yes", "on", " True "])
    def test_truthy(self, token):
        assert parse_flag(token) is True

    @pytest.mark.parametrize("token", ["false", "0", "no", "Off"])
    def test_falsy(self, token):
        assert parse_flag(token) is False

    def test_garbage(self):
        with pytest.raises(InvalidTagsError):
            parse_flag("maybe")
