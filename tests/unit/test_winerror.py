"""Unit tests for Windows error message lookup."""

from envvar.platform.winerror import (
    FORMAT_MESSAGE_FROM_SYSTEM,
    FORMAT_MESSAGE_IGNORE_INSERTS,
    LANG_NEUTRAL,
    MESSAGE_MAX_SIZE,
    SUBLANG_DEFAULT,
    get_error_message,
    make_lang_id,
)


class TestGetErrorMessage:
    """Tests for FormatMessageW based lookup."""

    def test_no_error_returns_none(self, kernel32):
        assert get_error_message(0, kernel32) is None
        assert kernel32.format_calls == []

    def test_known_code_is_trimmed(self, make_kernel32):
        kernel32 = make_kernel32(messages={2: "The system cannot find the file specified.\r\n"})
        assert get_error_message(2, kernel32) == "The system cannot find the file specified."

    def test_unknown_code_returns_none(self, kernel32):
        assert get_error_message(0xDEAD, kernel32) is None

    def test_requests_system_message_in_neutral_language(self, make_kernel32):
        kernel32 = make_kernel32(messages={5: "Access is denied."})
        get_error_message(5, kernel32)

        flags, code, language, size = kernel32.format_calls[0]
        assert flags == FORMAT_MESSAGE_FROM_SYSTEM | FORMAT_MESSAGE_IGNORE_INSERTS
        assert code == 5
        assert language == make_lang_id(LANG_NEUTRAL, SUBLANG_DEFAULT) == 0x400
        assert size == MESSAGE_MAX_SIZE

    def test_long_message_is_bounded(self, make_kernel32):
        kernel32 = make_kernel32(messages={7: "m" * (MESSAGE_MAX_SIZE * 2)})
        assert len(get_error_message(7, kernel32)) == MESSAGE_MAX_SIZE - 1
