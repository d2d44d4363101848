# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
Envvar: typed access to the process environment.

Reads, tests, enumerates and sets environment variables through the host's
native API:

    - POSIX: getenv / putenv / environ via the C library
    - Windows: GetEnvironmentVariableW / SetEnvironmentVariableW /
      GetEnvironmentStringsW via kernel32
    - Any platform: the interpreter's own ``os.environ`` mapping

Every call reads the live environment. Nothing is cached.

Example:
    >>> import envvar
    >>> envvar.set("GREETING", "hello")
    >>> envvar.get("GREETING")
    'hello'
    >>> envvar.contains("NO_SUCH_VARIABLE")
    False
"""

from __future__ import annotations

from typing import Optional

from envvar.base import Environment
from envvar.errors import (
    EnvvarError,
    InvalidVariableFormatError,
    NativeError,
    UnsupportedBackendError,
)
from envvar.process import ProcessEnvironment
from envvar.release import __version__, __author__
from envvar.selection import default_backend_name, get_environment

# Native accessor for the platform this interpreter runs on
environment: Environment = get_environment(default_backend_name())


def get(name: str) -> Optional[str]:
    """Return the value of *name*, or None if it is not set."""
    return environment.get(name)


def contains(name: str) -> bool:
    """Return True if *name* is set."""
    return environment.contains(name)


def to_map() -> dict[str, str]:
    """Return a snapshot of all environment variables."""
    return environment.to_map()


def set(name: str, value: str) -> None:
    """Set *name* to *value* for the current process."""
    environment.set(name, value)


__all__ = [
    "__version__",
    "__author__",
    "Environment",
    "EnvvarError",
    "InvalidVariableFormatError",
    "NativeError",
    "ProcessEnvironment",
    "UnsupportedBackendError",
    "contains",
    "environment",
    "get",
    "get_environment",
    "set",
    "to_map",
]
