# Copyright (c) 2024 Envvar Contributors
# MIT License

"""Windows error code to message lookup."""

from typing import Optional

from .kernel32 import ERROR_SUCCESS, alloc_wide, from_wide, load_kernel32

FORMAT_MESSAGE_IGNORE_INSERTS = 0x00000200
FORMAT_MESSAGE_FROM_SYSTEM = 0x00001000

LANG_NEUTRAL = 0x00
SUBLANG_DEFAULT = 0x01

MESSAGE_MAX_SIZE = 2048


def make_lang_id(primary: int, sub: int) -> int:
    """Equivalent of the MAKELANGID macro."""
    return (sub << 10) | primary


def get_error_message(error: int, kernel32=None) -> Optional[str]:
    """
    Return the system message for a Windows error code.

    Returns None for ERROR_SUCCESS and for codes the system has no message
    for; callers then build their own fallback text.
    """
    if error == ERROR_SUCCESS:
        return None

    if kernel32 is None:
        kernel32 = load_kernel32()

    buffer = alloc_wide(MESSAGE_MAX_SIZE)
    written = kernel32.FormatMessageW(
        FORMAT_MESSAGE_FROM_SYSTEM | FORMAT_MESSAGE_IGNORE_INSERTS,
        None,
        error,
        make_lang_id(LANG_NEUTRAL, SUBLANG_DEFAULT),
        buffer,
        MESSAGE_MAX_SIZE,
        None,
    )
    if not written:
        return None
    return from_wide(buffer, written).strip()
