"""
Unit test fixtures.

Provides an in-memory kernel32 so the Windows accessor's buffer handling can
be tested on any host.
"""

import ctypes
import uuid

import pytest

from envvar.platform.kernel32 import ERROR_ENVVAR_NOT_FOUND, LPWSTR, WCHAR, from_wide


def read_wide(buffer) -> str:
    """Decode a null-terminated wide array produced by to_wide()."""
    return from_wide(buffer, len(buffer))


class FakeKernel32:
    """
    Simulated kernel32 following the documented contracts.

    Lookups are case-insensitive, a too-small buffer makes
    GetEnvironmentVariableW return the required size including the
    terminator, and an empty value is reported as 0 without touching the
    last error.
    """

    def __init__(self, variables=None, messages=None):
        self.variables: dict[str, str] = dict(variables or {})
        self.messages: dict[int, str] = dict(messages or {})
        self.last_error = 0
        self.lookup_sizes: list[int] = []
        self.format_calls: list[tuple] = []
        self.freed = 0
        self.blocks_handed_out = 0
        self.fail_get_with = None
        self.fail_set_with = None
        self.raw_block = None
        self.block_available = True
        self._blocks = []

    # last-error channel, passed to WindowsEnvironment

    def get_last_error(self) -> int:
        return self.last_error

    def set_last_error(self, value: int) -> int:
        old, self.last_error = self.last_error, value
        return old

    def _find(self, name: str):
        for key, value in self.variables.items():
            if key.lower() == name.lower():
                return value
        return None

    def GetEnvironmentVariableW(self, name, buffer, size):
        self.lookup_sizes.append(size)
        if self.fail_get_with is not None:
            self.last_error = self.fail_get_with
            return 0

        value = self._find(read_wide(name))
        if value is None:
            self.last_error = ERROR_ENVVAR_NOT_FOUND
            return 0

        data = value.encode("utf-16-le", "surrogatepass")
        length = len(data) // 2
        if length + 1 > size:
            return length + 1
        ctypes.memmove(buffer, data, len(data))
        buffer[length] = 0
        return length

    def SetEnvironmentVariableW(self, name, value):
        if self.fail_set_with is not None:
            self.last_error = self.fail_set_with
            return 0

        key = read_wide(name)
        for existing in list(self.variables):
            if existing.lower() == key.lower():
                del self.variables[existing]
        self.variables[key] = read_wide(value)
        return 1

    def GetEnvironmentStringsW(self):
        if not self.block_available:
            return LPWSTR()

        if self.raw_block is not None:
            entries = self.raw_block
        else:
            entries = [f"{key}={value}" for key, value in self.variables.items()]

        data = "".join(entry + "\0" for entry in entries) + "\0"
        encoded = data.encode("utf-16-le", "surrogatepass")
        block = (WCHAR * (len(encoded) // 2))()
        ctypes.memmove(block, encoded, len(encoded))
        self._blocks.append(block)
        self.blocks_handed_out += 1
        return ctypes.cast(block, LPWSTR)

    def FreeEnvironmentStringsW(self, block):
        self.freed += 1
        return 1

    def FormatMessageW(self, flags, source, code, language, buffer, size, arguments):
        self.format_calls.append((flags, code, language, size))
        message = self.messages.get(code)
        if message is None:
            return 0
        data = message[: size - 1].encode("utf-16-le")
        ctypes.memmove(buffer, data, len(data))
        return len(data) // 2


@pytest.fixture
def kernel32() -> FakeKernel32:
    """A fake kernel32 holding FOO=bar and BAZ=qux."""
    return FakeKernel32({"FOO": "bar", "BAZ": "qux"})


@pytest.fixture
def unique_name() -> str:
    """A variable name that is not set anywhere yet."""
    return f"ENVVAR_TEST_{uuid.uuid4().hex.upper()}"


@pytest.fixture
def make_kernel32():
    """Factory for fake kernel32 instances (also usable as a base class)."""
    return FakeKernel32
