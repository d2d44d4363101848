# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
POSIX environment accessor.

Reads and writes the C library's environment directly through ctypes, using
getenv(3), putenv(3) and environ(7). Names and values go through the
filesystem encoding (``os.fsencode``/``os.fsdecode``), the same conversion
the interpreter applies to its own environment.
"""

import ctypes
import logging
import os
import threading
from typing import Optional

from envvar.base import Environment, parse_entry
from envvar.errors import NativeError, UnsupportedBackendError
from . import IS_MACOS, IS_POSIX

logger = logging.getLogger(__name__)

CharPArray = ctypes.POINTER(ctypes.c_char_p)

# putenv(3) makes the passed string part of the environment, so it must stay
# alive until it is replaced. Keyed by the name libc will file it under.
_PUTENV_STRINGS: dict[bytes, ctypes.Array] = {}
_PUTENV_LOCK = threading.Lock()


def to_c_string(text: str) -> bytes:
    """Encode *text* for libc, rejecting strings C would cut short."""
    data = os.fsencode(text)
    if b"\0" in data:
        raise ValueError("embedded null byte")
    return data


def load_libc() -> ctypes.CDLL:
    """Load the C library of the running process and declare prototypes."""
    if not IS_POSIX:
        raise UnsupportedBackendError("posix", suggestion="Use the 'windows' backend")

    libc = ctypes.CDLL(None, use_errno=True)
    libc.getenv.argtypes = [ctypes.c_char_p]
    libc.getenv.restype = ctypes.c_char_p
    libc.putenv.argtypes = [ctypes.c_char_p]
    libc.putenv.restype = ctypes.c_int
    if IS_MACOS:
        # environ is not exported to shared libraries on macOS
        libc._NSGetEnviron.argtypes = []
        libc._NSGetEnviron.restype = ctypes.POINTER(CharPArray)
    return libc


class PosixEnvironment(Environment):
    """
    Environment accessor for POSIX systems.

    Variable names are case-sensitive.
    """

    def __init__(self, libc: Optional[ctypes.CDLL] = None):
        self._libc = libc if libc is not None else load_libc()

    @property
    def name(self) -> str:
        return "posix"

    def get(self, name: str) -> Optional[str]:
        # getenv has no error channel, NULL only ever means "not set"
        raw = self._libc.getenv(to_c_string(name))
        if raw is None:
            return None
        return os.fsdecode(raw)

    def set(self, name: str, value: str) -> None:
        entry = to_c_string(name) + b"=" + to_c_string(value)
        buffer = ctypes.create_string_buffer(entry)

        with _PUTENV_LOCK:
            ctypes.set_errno(0)
            result = self._libc.putenv(buffer)
            if result == 0:
                _PUTENV_STRINGS[entry.partition(b"=")[0]] = buffer

        if result != 0:
            error = ctypes.get_errno()
            message = os.strerror(error) if error else None
            raise NativeError(
                error,
                message or f"Could not create environment variable '{name}'='{value}', error: {error}",
            )

        logger.debug("Set environment variable: %s", name)

    def to_map(self) -> dict[str, str]:
        entries = self._environ()
        if not entries:
            return {}

        result: dict[str, str] = {}
        index = 0
        while True:
            raw = entries[index]
            if raw is None:
                break
            name, value = parse_entry(os.fsdecode(raw))
            result[name] = value
            index += 1

        logger.debug("Read %d variables from environ", len(result))
        return result

    def _environ(self):
        """Return the current ``char **environ`` (may be NULL)."""
        if IS_MACOS:
            return self._libc._NSGetEnviron().contents
        return CharPArray.in_dll(self._libc, "environ")
