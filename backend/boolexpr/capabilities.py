"""
Capabilities that operands may require of the value they are evaluated
against.

An operand declares the capabilities it needs so that callers can avoid
expensive work, e.g. a directory walker only needs to stat a file when an
expression needs ``FILE_MODE``, ``MOD_TIME`` or ``SIZE``. Values advertise
capabilities by implementing the matching protocol below; the protocol
members must be methods.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Protocol, runtime_checkable


class Capability(str, Enum):
    """Closed set of capabilities an operand can require."""

    TEXT = "text"
    NAME = "name"
    PATH = "path"
    FILE_TYPE = "file_type"
    FILE_MODE = "file_mode"
    MOD_TIME = "mod_time"
    SIZE = "size"
    DIR_SIZE = "dir_size"
    XATTR = "xattr"


@runtime_checkable
class HasName(Protocol):
    def name(self) -> str: ...


@runtime_checkable
class HasPath(Protocol):
    def path(self) -> str: ...


@runtime_checkable
class HasFileType(Protocol):
    """File type bits only (regular, directory, symlink), no permissions."""

    def file_type(self) -> int: ...


@runtime_checkable
class HasFileMode(Protocol):
    def mode(self) -> int: ...


@runtime_checkable
class HasModTime(Protocol):
    def mod_time(self) -> datetime: ...


@runtime_checkable
class HasSize(Protocol):
    def size(self) -> int: ...


@runtime_checkable
class HasDirSize(Protocol):
    def num_entries(self) -> int: ...


@runtime_checkable
class HasXAttr(Protocol):
    def xattr(self) -> Mapping[str, Any]: ...


def _has_method(attr: str) -> Callable[[Any], bool]:
    # a plain attribute of the same name (os.DirEntry.name, Path.name) does
    # not provide the capability
    return lambda v: callable(getattr(v, attr, None))


_PROVIDERS: Dict[Capability, Callable[[Any], bool]] = {
    Capability.TEXT: lambda v: isinstance(v, str),
    Capability.NAME: _has_method("name"),
    Capability.PATH: _has_method("path"),
    Capability.FILE_TYPE: _has_method("file_type"),
    Capability.FILE_MODE: _has_method("mode"),
    Capability.MOD_TIME: _has_method("mod_time"),
    Capability.SIZE: _has_method("size"),
    Capability.DIR_SIZE: _has_method("num_entries"),
    Capability.XATTR: _has_method("xattr"),
}


def provides(value: Any, capability: Capability) -> bool:
    """Return True if value can be queried for the given capability."""
    check = _PROVIDERS.get(capability)
    if check is None:
        return False
    return check(value)
