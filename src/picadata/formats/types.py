# topmark:header:start
#
#   project      : PicaData
#   file         : types.py
#   file_relpath : src/picadata/formats/types.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Serialization types and the closed name/extension registry.

The registry maps user-facing type names and file-extension hints to a
`PicaType`. It is a fixed table: nothing can be registered at runtime.

Lookup is case-insensitive:

    >>> resolve_type("PLAIN")
    <PicaType.PLAIN: 'plain'>
    >>> resolve_type("dat")
    <PicaType.BINARY: 'binary'>
    >>> resolve_type("marc") is None
    True
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from picadata.core.errors import UnknownTypeError

if TYPE_CHECKING:
    from collections.abc import Mapping


class PicaType(str, Enum):
    """Supported PICA+ serialization types.

    Attributes:
        BINARY: Normalized PICA (field terminator ``\\x1E``, record terminator ``\\x1D``).
        PLAIN: Human-readable PICA Plain, one field per line.
        PLUS: Normalized PICA, one record per line.
        XML: PICA-XML.
        PPXML: PICA+ XML with holdings/copy structure.
    """

    BINARY = "binary"
    PLAIN = "plain"
    PLUS = "plus"
    XML = "xml"
    PPXML = "ppxml"


_TYPE_NAMES: Final[Mapping[str, PicaType]] = MappingProxyType(
    {
        "bin": PicaType.BINARY,
        "dat": PicaType.BINARY,
        "binary": PicaType.BINARY,
        "plain": PicaType.PLAIN,
        "plus": PicaType.PLUS,
        "xml": PicaType.XML,
        "ppxml": PicaType.PPXML,
    }
)


def type_names() -> tuple[str, ...]:
    """Return all recognized type names and extension aliases (sorted)."""
    return tuple(sorted(_TYPE_NAMES))


def resolve_type(name_or_extension: str) -> PicaType | None:
    """Return the `PicaType` for a type name or extension, or None if unrecognized.

    Args:
        name_or_extension (str): A type name (``"plain"``) or an extension
            without the leading dot (``"dat"``). Case is ignored.

    Returns:
        PicaType | None: The matching type, or ``None``.
    """
    return _TYPE_NAMES.get(name_or_extension.strip().lower())


def require_type(name: str) -> PicaType:
    """Like `resolve_type`, but raise on unrecognized names.

    Raises:
        UnknownTypeError: If ``name`` is not a recognized type name.
    """
    pica_type = resolve_type(name)
    if pica_type is None:
        raise UnknownTypeError(name)
    return pica_type


def guess_type_from_filename(filename: str) -> PicaType | None:
    """Guess the serialization type from the extension of ``filename``.

    Only the last suffix is considered (``records.pica.xml`` → XML).
    """
    suffix = PurePath(filename).suffix
    if not suffix:
        return None
    return resolve_type(suffix[1:])
