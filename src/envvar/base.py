# Copyright (c) 2024 Envvar Contributors
# MIT License

"""
Envvar Environment Base Class

Abstract base class for all environment accessors. Each host platform
(POSIX libc, Windows kernel32, the interpreter's own process mapping) has one
implementation of this interface.

Whether variable names are case significant is decided by the host and is
never normalised here.
"""

from abc import ABC, abstractmethod
from typing import Optional

from envvar.errors import InvalidVariableFormatError


def parse_entry(raw: str) -> tuple[str, str]:
    """
    Split a raw ``name=value`` environment entry on its first ``=``.

    Raises:
        InvalidVariableFormatError: If the entry contains no ``=`` at all.
    """
    name, sep, value = raw.partition("=")
    if not sep:
        raise InvalidVariableFormatError(raw)
    return name, value


class Environment(ABC):
    """
    Abstract base class for environment accessors.

    Every call reads the live process environment; nothing is cached, so two
    calls are two independent snapshots.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier (e.g. 'posix', 'windows', 'process')."""
        pass

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """
        Return the value of the variable *name*, or None if it is not set.

        Raises:
            NativeError: If the OS reports a failure other than "not found".
        """
        pass

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """
        Create or overwrite *name* for the current process only.

        Raises:
            NativeError: If the OS rejects the variable.
        """
        pass

    @abstractmethod
    def to_map(self) -> dict[str, str]:
        """
        Return a fresh mapping of every variable defined for the process.

        An empty dict is returned if the host exposes no environment block.

        Raises:
            InvalidVariableFormatError: If a raw entry is not ``name=value``.
                No partial mapping is returned in that case.
        """
        pass

    def contains(self, name: str) -> bool:
        """
        Return True if *name* is set.

        Equivalent to ``get(name) is not None`` and raises whatever
        :meth:`get` raises.
        """
        return self.get(name) is not None

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.contains(name)

    def __getitem__(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __setitem__(self, name: str, value: str) -> None:
        self.set(name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
