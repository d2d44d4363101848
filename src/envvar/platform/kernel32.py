# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
ctypes bindings for the kernel32 functions used by the Windows accessor.

Wide strings are handled as arrays of 16-bit UTF-16-LE code units rather than
``c_wchar`` so the encoding is the same regardless of the platform's
``wchar_t`` width.
"""

import ctypes
import struct
from typing import Sequence

from envvar.errors import UnsupportedBackendError
from . import IS_WINDOWS

WCHAR = ctypes.c_uint16
LPWSTR = ctypes.POINTER(WCHAR)
DWORD = ctypes.c_uint32
BOOL = ctypes.c_int

ERROR_SUCCESS = 0
ERROR_ENVVAR_NOT_FOUND = 203


def load_kernel32():
    """Load kernel32 with last-error tracking and declare prototypes."""
    if not IS_WINDOWS:
        raise UnsupportedBackendError("windows", suggestion="Use the 'posix' backend")

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)

    kernel32.GetEnvironmentVariableW.argtypes = [LPWSTR, LPWSTR, DWORD]
    kernel32.GetEnvironmentVariableW.restype = DWORD

    kernel32.SetEnvironmentVariableW.argtypes = [LPWSTR, LPWSTR]
    kernel32.SetEnvironmentVariableW.restype = BOOL

    kernel32.GetEnvironmentStringsW.argtypes = []
    kernel32.GetEnvironmentStringsW.restype = LPWSTR

    kernel32.FreeEnvironmentStringsW.argtypes = [LPWSTR]
    kernel32.FreeEnvironmentStringsW.restype = BOOL

    kernel32.FormatMessageW.argtypes = [
        DWORD, ctypes.c_void_p, DWORD, DWORD, LPWSTR, DWORD, ctypes.c_void_p,
    ]
    kernel32.FormatMessageW.restype = DWORD

    return kernel32


def alloc_wide(size: int) -> ctypes.Array:
    """Allocate a zeroed buffer of *size* UTF-16 code units."""
    return (WCHAR * size)()


def to_wide(text: str) -> ctypes.Array:
    """Encode *text* as a null-terminated UTF-16-LE buffer."""
    if "\0" in text:
        raise ValueError("embedded null character")
    data = text.encode("utf-16-le", "surrogatepass")
    buffer = alloc_wide(len(data) // 2 + 1)
    ctypes.memmove(buffer, data, len(data))
    return buffer


def decode_units(units: Sequence[int]) -> str:
    """Decode a sequence of UTF-16 code units (no terminator) to text."""
    data = struct.pack(f"<{len(units)}H", *units)
    return data.decode("utf-16-le", "surrogatepass")


def from_wide(buffer, limit: int) -> str:
    """Decode a null-terminated wide string, reading at most *limit* units."""
    units = []
    for index in range(limit):
        unit = buffer[index]
        if unit == 0:
            break
        units.append(unit)
    return decode_units(units)
