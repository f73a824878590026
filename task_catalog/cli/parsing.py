"""Turn console input into typed values for the catalog."""

from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Type, TypeVar

from ..schemas import ChangeKind, FieldChange

E = TypeVar("E", bound=Enum)
T = TypeVar("T")


def parse_due_date(text: str, date_format: str = "%Y-%m-%d %H:%M") -> Optional[datetime]:
    """Parse ``text`` with ``date_format``; None when it does not match."""
    try:
        return datetime.strptime(text.strip(), date_format)
    except ValueError:
        return None


def parse_enum(enum_cls: Type[E], text: str) -> Optional[E]:
    """Look up an enum member by name or value, ignoring case.

    ``in progress`` and ``in-progress`` are read as ``IN_PROGRESS``.
    """
    token = text.strip().upper().replace("-", "_").replace(" ", "_")
    if not token:
        return None
    if token in enum_cls.__members__:
        return enum_cls[token]
    for member in enum_cls:
        if str(member.value).upper() == token:
            return member
    return None


def parse_optional_change(
    text: str,
    parse: Callable[[str], Optional[T]],
    clear_keyword: str = "clear",
) -> Optional[FieldChange]:
    """Read an update answer for an optional field.

    An empty answer is an omit and the clear keyword is a clear. Anything
    else goes through ``parse`` and becomes a set; None is returned when it
    does not parse.
    """
    stripped = text.strip()
    if not stripped:
        return FieldChange(ChangeKind.OMIT)
    if stripped.lower() == clear_keyword.lower():
        return FieldChange(ChangeKind.CLEAR)
    value = parse(stripped)
    if value is None:
        return None
    return FieldChange(ChangeKind.SET, value)
