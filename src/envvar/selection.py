# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
Backend selection.

The native backend is chosen from the platform detected at import time. The
``ENVVAR_BACKEND`` variable, or an explicit name, overrides it.
"""

import logging
import os
from typing import Callable, Optional

from envvar.base import Environment
from envvar.errors import UnsupportedBackendError
from envvar.platform import IS_WINDOWS

logger = logging.getLogger(__name__)

BACKEND_ENV_VAR = "ENVVAR_BACKEND"


def _posix() -> Environment:
    from envvar.platform.posix import PosixEnvironment
    return PosixEnvironment()


def _windows() -> Environment:
    from envvar.platform.windows import WindowsEnvironment
    return WindowsEnvironment()


def _process() -> Environment:
    from envvar.process import ProcessEnvironment
    return ProcessEnvironment()


BACKENDS: dict[str, Callable[[], Environment]] = {
    "posix": _posix,
    "windows": _windows,
    "process": _process,
}


def default_backend_name() -> str:
    """Return the native backend name for the running platform."""
    return "windows" if IS_WINDOWS else "posix"


def get_environment(name: Optional[str] = None) -> Environment:
    """
    Create an environment accessor.

    Args:
        name: Backend name ('posix', 'windows' or 'process'). Defaults to
            ``$ENVVAR_BACKEND``, then to the platform's native backend.

    Raises:
        UnsupportedBackendError: If the backend is unknown or cannot be
            loaded on this platform.
    """
    if name is None:
        name = os.environ.get(BACKEND_ENV_VAR) or default_backend_name()

    factory = BACKENDS.get(name.lower())
    if factory is None:
        raise UnsupportedBackendError(
            name,
            suggestion=f"Choose one of: {', '.join(sorted(BACKENDS))}",
        )

    logger.debug("Using %s environment backend", name)
    return factory()
