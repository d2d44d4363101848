# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
Native environment accessors.

One module per host OS. The flags below are evaluated once at import time and
decide which accessor ``envvar`` uses by default.
"""

import platform as _platform

# Detect current platform
IS_WINDOWS = _platform.system() == "Windows"
IS_MACOS = _platform.system() == "Darwin"
IS_POSIX = not IS_WINDOWS

PLATFORM_NAME = _platform.system().lower()
