"""Tests for L20nParser: the entity scanning loop, limits, logging and outcomes."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from l20nlexengine.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from l20nlexengine.core.depth_guard import DepthLimitExceededError
from l20nlexengine.diagnostics import DiagnosticCode, L20nSyntaxError
from l20nlexengine.syntax.ast import (
    ComplexEntity,
    Macro,
    Placeholder,
    PlainValue,
    StringParts,
    StringValue,
    TextSegment,
)
from l20nlexengine.syntax.parser import L20nParser, ParseOutcome
from tests.strategies import l20n_chaos_source, l20n_names

_CORE_LOGGER = "l20nlexengine.syntax.parser.core"

# ============================================================================
# CONFIGURATION
# ============================================================================


class TestL20nParserProperties:
    """Test L20nParser configuration accessors."""

    def test_defaults(self) -> None:
        """Defaults come from constants."""
        parser = L20nParser()

        assert parser.max_source_size == MAX_SOURCE_SIZE
        assert parser.max_nesting_depth == MAX_DEPTH
        assert parser.split_placeholders is False

    def test_custom_values(self) -> None:
        """Keyword arguments override the defaults."""
        parser = L20nParser(
            max_source_size=10, max_nesting_depth=5, split_placeholders=True
        )

        assert parser.max_source_size == 10
        assert parser.max_nesting_depth == 5
        assert parser.split_placeholders is True


class TestL20nParserSourceSize:
    """Test source size validation."""

    def test_oversized_source_rejected(self) -> None:
        """Sources over the limit raise ValueError before parsing."""
        parser = L20nParser(max_source_size=10)

        with pytest.raises(ValueError, match=r"Source size \(11 characters\) exceeds"):
            parser.parse("x" * 11)

    def test_source_at_limit_accepted(self) -> None:
        """The limit itself is allowed."""
        parser = L20nParser(max_source_size=7)

        assert list(parser.parse('<a "b">')) == ["a"]

    def test_zero_disables_limit(self) -> None:
        """max_source_size=0 turns the check off."""
        parser = L20nParser(max_source_size=0)

        assert len(parser.parse('<a "b">' * 100)) == 1


# ============================================================================
# SCANNING LOOP
# ============================================================================


class TestL20nParserResources:
    """Test whole-resource parsing."""

    def test_empty_source(self) -> None:
        """Empty input gives an empty resource."""
        assert len(L20nParser().parse("")) == 0

    def test_only_comments(self) -> None:
        """Comments alone give an empty resource."""
        assert len(L20nParser().parse("/* a */ /* b */")) == 0

    def test_entities_in_order(self) -> None:
        """Keys keep source order."""
        resource = L20nParser().parse('<a "1">\n<b "2">\n<c "3">')

        assert list(resource) == ["a", "b", "c"]
        assert resource["b"] == PlainValue(StringValue("2"))

    def test_duplicate_key_last_wins(self) -> None:
        """A later definition replaces the earlier one."""
        resource = L20nParser().parse('<a "1"> <a "2">')

        assert dict(resource) == {"a": PlainValue(StringValue("2"))}

    def test_duplicate_key_moves_to_end(self) -> None:
        """The replacing definition takes the later position."""
        resource = L20nParser().parse('<a "1"> <b "2"> <a "3">')

        assert list(resource) == ["b", "a"]

    def test_mixed_entries(self) -> None:
        """Entities and macros share one namespace."""
        source = """
        /* Plural rule */
        <plural(n) { n == 1 ? "one" : "many" }>
        <brand "Firefox" short: "Fx">
        <unread[plural(n)] {one: "1 message", many: "{{ n }} messages"}>
        <hello "Hello, {{ brand }}!">
        """
        resource = L20nParser(split_placeholders=True).parse(source)

        assert list(resource.macros) == ["plural"]
        assert list(resource.entities) == ["brand", "unread", "hello"]
        assert isinstance(resource["plural"], Macro)
        assert isinstance(resource["unread"], ComplexEntity)
        assert resource["hello"] == PlainValue(
            StringParts(
                (
                    TextSegment("Hello, "),
                    Placeholder("{{ brand }}"),
                    TextSegment("!"),
                )
            )
        )

    def test_strings_whole_by_default(self) -> None:
        """Without the option strings with placeholders stay one StringValue."""
        resource = L20nParser().parse('<a "x {{ y }}">')

        assert resource["a"] == PlainValue(StringValue("x {{ y }}"))

    def test_trailing_text_ignored(self) -> None:
        """Text after the last entity is not parsed."""
        resource = L20nParser().parse('<a "1"> trailing junk')

        assert list(resource) == ["a"]

    def test_parser_is_reusable(self) -> None:
        """One parser instance parses many sources independently."""
        parser = L20nParser(max_nesting_depth=5)

        with pytest.raises(L20nSyntaxError):
            parser.parse('<a [[[[[["x"]]]]]]>')
        assert list(parser.parse('<b [[["x"]]]>')) == ["b"]

    @given(st.lists(l20n_names(), min_size=1, max_size=10, unique=True))
    def test_distinct_keys_all_kept(self, names: list[str]) -> None:
        """PROPERTY: N distinct keys give N entries in order."""
        source = "\n".join(f'<{name} "v{i}">' for i, name in enumerate(names))
        resource = L20nParser().parse(source)

        assert list(resource) == names


# ============================================================================
# ERRORS
# ============================================================================


class TestL20nParserErrors:
    """Test fail-fast error reporting."""

    def test_unclosed_entity(self) -> None:
        """A missing '>' is a syntax error."""
        with pytest.raises(L20nSyntaxError) as exc_info:
            L20nParser().parse('<a "x"')

        assert str(exc_info.value) == 'l10n parsing error: \n<a "x" ### '

    def test_unterminated_string(self) -> None:
        """An unterminated string is a syntax error."""
        with pytest.raises(L20nSyntaxError) as exc_info:
            L20nParser().parse('<a "abc')

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNTERMINATED_STRING

    def test_error_after_valid_entries(self) -> None:
        """Earlier entries are not returned when a later one fails."""
        with pytest.raises(L20nSyntaxError) as exc_info:
            L20nParser().parse('<a "1"> <b "2" <c "3">')

        assert exc_info.value.consumed == '<a "1"> <b "2"'
        assert exc_info.value.remaining == ' <c "3">'

    def test_context_window_truncated(self) -> None:
        """Error context is limited to 128 characters on each side."""
        source = "<a " + '["x", ' * 100
        with pytest.raises(L20nSyntaxError) as exc_info:
            L20nParser(max_nesting_depth=1000).parse(source)

        message = str(exc_info.value)
        consumed, remaining = message.removeprefix("l10n parsing error: \n").split(" ### ")
        assert len(consumed) == 128
        assert remaining == ""

    def test_depth_limit(self) -> None:
        """Nesting past max_nesting_depth raises DepthLimitExceededError."""
        with pytest.raises(DepthLimitExceededError):
            L20nParser(max_nesting_depth=3).parse('<a [[[["x"]]]]>')

    def test_deep_parentheses_under_high_limit(self) -> None:
        """A limit above what the stack holds still fails with a depth error."""
        source = "<m() {" + "(" * 300 + "1" + ")" * 300 + "}>"

        with pytest.raises(DepthLimitExceededError) as exc_info:
            L20nParser(max_nesting_depth=900).parse(source)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.NESTING_DEPTH_EXCEEDED

    def test_deep_parentheses_outcome(self) -> None:
        """parse_outcome reports stack-deep input as a diagnostic."""
        source = "<m() {" + "(" * 300 + "1" + ")" * 300 + "}>"

        outcome = L20nParser(max_nesting_depth=900).parse_outcome(source)

        assert outcome.diagnostic is not None
        assert outcome.diagnostic.code == DiagnosticCode.NESTING_DEPTH_EXCEEDED

    def test_stack_exhaustion_becomes_depth_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A RecursionError inside the rules surfaces as DepthLimitExceededError."""

        def exhausted(*_args: object) -> None:
            raise RecursionError

        monkeypatch.setattr("l20nlexengine.syntax.parser.core.parse_entity", exhausted)

        with pytest.raises(DepthLimitExceededError) as exc_info:
            L20nParser().parse('<a "x">')

        assert isinstance(exc_info.value.__cause__, RecursionError)
        assert exc_info.value.consumed == "<"


# ============================================================================
# OUTCOMES
# ============================================================================


class TestParseOutcome:
    """Test the non-raising parse entry point."""

    def test_success(self) -> None:
        """A valid source gives a resource."""
        outcome = L20nParser().parse_outcome('<a "1">')

        assert outcome.is_ok
        assert outcome.resource is not None
        assert list(outcome.resource) == ["a"]
        assert outcome.diagnostic is None

    def test_failure(self) -> None:
        """An invalid source gives the diagnostic instead of raising."""
        outcome = L20nParser().parse_outcome('<a "1"')

        assert outcome == ParseOutcome(diagnostic=outcome.diagnostic)
        assert not outcome.is_ok
        assert outcome.diagnostic is not None
        assert outcome.diagnostic.code == DiagnosticCode.EXPECTED_TOKEN

    @given(l20n_chaos_source())
    def test_never_raises_syntax_errors(self, source: str) -> None:
        """PROPERTY: parse_outcome turns every syntax error into a diagnostic."""
        outcome = L20nParser(max_nesting_depth=20).parse_outcome(source)

        assert outcome.is_ok != (outcome.diagnostic is not None)


# ============================================================================
# LOGGING
# ============================================================================


class TestL20nParserLogging:
    """Test log records emitted while parsing."""

    def test_entity_registration_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Each entity and macro is logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger=_CORE_LOGGER):
            L20nParser().parse('<a "1"> <m(n) { n }>')

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert "Registered entity: a" in messages
        assert "Registered macro: m" in messages

    def test_duplicate_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Replacing a duplicate key is logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger=_CORE_LOGGER):
            L20nParser().parse('<a "1"> <a "2">')

        assert any("Replaced duplicate key: a" in r.getMessage() for r in caplog.records)

    def test_summary_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """A summary is logged at INFO."""
        with caplog.at_level(logging.INFO, logger=_CORE_LOGGER):
            L20nParser().parse('<a "1"> <m(n) { n }>', source_path="app.l20n")

        info = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        assert info == ["Parsed resource app.l20n: 1 entities, 1 macros"]

    def test_trailing_content_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Ignored trailing text is logged at WARNING."""
        with caplog.at_level(logging.WARNING, logger=_CORE_LOGGER):
            L20nParser().parse('<a "1"> junk')

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "'junk'" in warnings[0].getMessage()

    def test_trailing_whitespace_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Whitespace after the last entity is not worth a warning."""
        with caplog.at_level(logging.WARNING, logger=_CORE_LOGGER):
            L20nParser().parse('<a "1">\n\n  ')

        assert not [r for r in caplog.records if r.levelno == logging.WARNING]

    def test_failure_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """A syntax error is logged at DEBUG only; reporting is the caller's job."""
        with (
            caplog.at_level(logging.DEBUG, logger=_CORE_LOGGER),
            pytest.raises(L20nSyntaxError),
        ):
            L20nParser().parse("<a", source_path="bad.l20n")

        failures = [r for r in caplog.records if "Failed to parse" in r.getMessage()]
        assert len(failures) == 1
        assert failures[0].levelno == logging.DEBUG
        assert "bad.l20n" in failures[0].getMessage()

    def test_outcome_failure_not_reported(self, caplog: pytest.LogCaptureFixture) -> None:
        """parse_outcome emits nothing at WARNING or above for a syntax error."""
        with caplog.at_level(logging.WARNING, logger=_CORE_LOGGER):
            outcome = L20nParser().parse_outcome("<a")

        assert outcome.diagnostic is not None
        assert not caplog.records
