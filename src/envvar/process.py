# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
Process-mapping environment accessor.

Delegates straight to a host-provided process environment object, by default
the interpreter's ``os.environ``. There are no buffers and no native error
channel; this exists so callers can use the same interface everywhere.

Note that ``os.environ`` is Python's own view of the environment: writes go
through ``putenv`` as well, but variables set directly through libc or
kernel32 after start-up are not visible here.
"""

import logging
import os
from typing import MutableMapping, Optional

from envvar.base import Environment

logger = logging.getLogger(__name__)


class ProcessEnvironment(Environment):
    """
    Environment accessor backed by a process environment mapping.

    Example:
        >>> env = ProcessEnvironment({"FOO": "bar"})
        >>> env.get("FOO")
        'bar'
        >>> env.contains("MISSING")
        False
    """

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    @property
    def name(self) -> str:
        return "process"

    def get(self, name: str) -> Optional[str]:
        return self._environ.get(name)

    def set(self, name: str, value: str) -> None:
        self._environ[name] = value
        logger.debug("Set process environment variable: %s", name)

    def to_map(self) -> dict[str, str]:
        return {key: value for key, value in self._environ.items()}
