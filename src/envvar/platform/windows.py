# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
Windows environment accessor.

Uses the wide-character kernel32 API explicitly (GetEnvironmentVariableW,
SetEnvironmentVariableW, GetEnvironmentStringsW) so values are always read
and written as UTF-16, never through the ANSI code page.
"""

import ctypes
import logging
from typing import Callable, Optional

from envvar.base import Environment, parse_entry
from envvar.errors import NativeError
from .kernel32 import (
    ERROR_ENVVAR_NOT_FOUND,
    ERROR_SUCCESS,
    alloc_wide,
    decode_units,
    from_wide,
    load_kernel32,
    to_wide,
)
from .winerror import get_error_message

logger = logging.getLogger(__name__)

# Documented maximum length of a user-defined variable, plus the terminator.
# Variables created by programs have no such limit, hence the resize path.
DEFAULT_BUFFER_SIZE = 32_767 + 1


class WindowsEnvironment(Environment):
    """
    Environment accessor for Windows.

    ``get`` and ``contains`` are case-insensitive because kernel32 folds case
    on lookup. ``to_map`` returns names exactly as stored in the environment
    block, so the returned dict is case-sensitive.

    Args:
        kernel32: Loaded kernel32 library (loaded on demand if omitted).
        get_last_error: Reads the thread's last-error value.
        set_last_error: Resets the thread's last-error value.
    """

    def __init__(
        self,
        kernel32=None,
        get_last_error: Optional[Callable[[], int]] = None,
        set_last_error: Optional[Callable[[int], int]] = None,
    ):
        self._kernel32 = kernel32 if kernel32 is not None else load_kernel32()
        self._get_last_error = get_last_error or ctypes.get_last_error
        self._set_last_error = set_last_error or ctypes.set_last_error

    @property
    def name(self) -> str:
        return "windows"

    def get(self, name: str) -> Optional[str]:
        wide_name = to_wide(name)
        buffer = alloc_wide(DEFAULT_BUFFER_SIZE)

        self._set_last_error(ERROR_SUCCESS)
        result = self._kernel32.GetEnvironmentVariableW(wide_name, buffer, DEFAULT_BUFFER_SIZE)

        if result == 0:
            error = self._get_last_error()
            if error == ERROR_ENVVAR_NOT_FOUND:
                return None
            if error == ERROR_SUCCESS:
                # variable exists with an empty value
                return ""
            raise NativeError(
                error,
                self._error_message(error)
                or f"Could not retrieve variable '{name}', error: {error}",
            )

        if result > DEFAULT_BUFFER_SIZE:
            # Too small: result is the required size including the terminator.
            # The variable may change before the second call; that race is
            # accepted rather than looped on.
            logger.debug("Resizing buffer for %s to %d units", name, result)
            sized = alloc_wide(result)
            self._kernel32.GetEnvironmentVariableW(wide_name, sized, result)
            return from_wide(sized, result)

        return decode_units(buffer[:result])

    def set(self, name: str, value: str) -> None:
        result = self._kernel32.SetEnvironmentVariableW(to_wide(name), to_wide(value))
        if result == 0:
            error = self._get_last_error()
            raise NativeError(
                error,
                self._error_message(error)
                or f"Could not create environment variable '{name}'='{value}', error: {error}",
            )
        logger.debug("Set environment variable: %s", name)

    def to_map(self) -> dict[str, str]:
        block = self._kernel32.GetEnvironmentStringsW()
        if not block:
            return {}

        try:
            result: dict[str, str] = {}
            index = 0
            # entries are null-terminated, the block ends with an empty entry
            while block[index] != 0:
                units = []
                while block[index] != 0:
                    units.append(block[index])
                    index += 1
                name, value = parse_entry(decode_units(units))
                result[name] = value
                index += 1
        finally:
            self._kernel32.FreeEnvironmentStringsW(block)

        logger.debug("Read %d variables from environment block", len(result))
        return result

    def _error_message(self, error: int) -> Optional[str]:
        return get_error_message(error, self._kernel32)
