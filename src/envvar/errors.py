# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
Envvar Error Classes.

All custom exceptions raised by the environment accessors, plus the exit
codes the ``envvar`` command line tool maps them to.

A variable that simply does not exist is never an error: accessors return
``None`` for it. Only genuine OS failures and malformed environment blocks
raise.
"""

from __future__ import annotations

import enum


class ExitCode(enum.IntEnum):
    """Exit codes used by the envvar CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    NOT_FOUND = 2
    FORMAT_ERROR = 3
    UNSUPPORTED = 4
    KEYBOARD_INTERRUPT = 130


class EnvvarError(Exception):
    """Base exception for all envvar errors."""

    exit_code: int = ExitCode.GENERIC_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class NativeError(EnvvarError):
    """
    An OS call reported a failure other than "variable not found".

    Carries the numeric OS error code (``errno`` on POSIX, ``GetLastError()``
    on Windows) and the message resolved for it. These are surfaced as-is and
    never retried.
    """

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} (code {self.code})"


class InvalidVariableFormatError(EnvvarError):
    """A raw environment entry was not shaped like ``name=value``."""

    exit_code: int = ExitCode.FORMAT_ERROR

    def __init__(self, entry: str) -> None:
        self.entry = entry
        super().__init__(f"No '=' delimiter found in environment variable: {entry}")


class UnsupportedBackendError(EnvvarError):
    """The requested environment backend is unknown or unusable on this host."""

    exit_code: int = ExitCode.UNSUPPORTED

    def __init__(self, backend: str, suggestion: str | None = None) -> None:
        self.backend = backend
        msg = f"Unsupported environment backend: {backend}"
        if suggestion:
            msg += f"\n  Suggestion: {suggestion}"
        super().__init__(msg)
