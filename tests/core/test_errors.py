"""Tests for error types and codes."""

import pytest

from tracemark.core.errors import (
    ConfigError,
    ErrorCode,
    ParseError,
    TracemarkError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.PARSE_UNSUPPORTED_LANGUAGE, 3000),
            (ErrorCode.PARSE_GRAMMAR_UNAVAILABLE, 3000),
            (ErrorCode.PARSE_UNREADABLE_FILE, 3000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestTracemarkError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = TracemarkError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = TracemarkError(
            code=ErrorCode.PARSE_UNREADABLE_FILE, message="Something broke"
        )

        # When
        result = str(error)

        # Then
        assert result == "[3003] PARSE_UNREADABLE_FILE: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are real exceptions."""
        with pytest.raises(TracemarkError):
            raise ParseError.unsupported_language("notes.txt", "txt")


class TestConfigError:
    """ConfigError factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            (
                "parse_error",
                {"path": "/foo", "reason": "bad yaml"},
                ErrorCode.CONFIG_PARSE_ERROR,
            ),
            (
                "invalid_value",
                {"field": "scan.max_file_size_mb", "value": -1, "reason": "negative"},
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory: str, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        """Factory methods produce errors with correct error codes."""
        # Given
        factory_method = getattr(ConfigError, factory)

        # When
        error = factory_method(**kwargs)

        # Then
        assert error.code == expected_code

    def test_given_invalid_value_when_created_then_value_stringified(self) -> None:
        """Invalid value keeps a JSON-safe copy of the offending value."""
        error = ConfigError.invalid_value("scan.languages", ["cobol"], "unknown")

        assert error.details == {
            "field": "scan.languages",
            "value": "['cobol']",
            "reason": "unknown",
        }


class TestParseError:
    """ParseError factory method tests."""

    def test_given_unsupported_extension_when_created_then_names_extension(self) -> None:
        error = ParseError.unsupported_language("notes.txt", "txt")

        assert error.code == ErrorCode.PARSE_UNSUPPORTED_LANGUAGE
        assert error.message == "Unsupported file extension: txt"
        assert error.details == {"path": "notes.txt", "extension": "txt"}

    def test_given_no_extension_when_created_then_placeholder(self) -> None:
        error = ParseError.unsupported_language("Makefile", "")

        assert error.message == "Unsupported file extension: <none>"

    def test_given_missing_grammar_when_created_then_install_hint(self) -> None:
        error = ParseError.grammar_unavailable("rust", "tree-sitter-rust")

        assert error.code == ErrorCode.PARSE_GRAMMAR_UNAVAILABLE
        assert "install tree-sitter-rust" in error.message
        assert not error.retryable

    def test_given_unreadable_file_when_created_then_retryable(self) -> None:
        error = ParseError.unreadable("/src/a.c", "Permission denied")

        assert error.code == ErrorCode.PARSE_UNREADABLE_FILE
        assert error.retryable
