from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence

from .exceptions import ParseError


_UNSIGNED_INT_RE = re.compile(r"[0-9]+")


def split_row(row: Any) -> list[str]:
    if isinstance(row, (bytes, bytearray)):
        try:
            row = row.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"undecodable bytes at offset {exc.start}: {exc.reason}") from exc
    if isinstance(row, str):
        return row.rstrip("\r\n").split("\t")
    return ["" if value is None else str(value) for value in row]


def is_blank(fields: Sequence[str]) -> bool:
    return all(not field.strip() for field in fields)


def iter_rows(
    rows: Iterable[Any],
    skip_comments: bool = False,
    on_error: Optional[Callable[[ParseError], None]] = None,
) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(row_number, fields)`` for non-blank rows, numbered from 1.

    Rows that cannot be split are passed to ``on_error`` and skipped; without a
    handler the ``ParseError`` propagates.
    """
    for row_number, row in enumerate(rows, start=1):
        try:
            fields = split_row(row)
        except ParseError as exc:
            error = ParseError(str(exc), row_number=row_number)
            if on_error is None:
                raise error from exc
            on_error(error)
            continue
        if is_blank(fields):
            continue
        if skip_comments and fields[0].lstrip().startswith("#"):
            continue
        yield row_number, fields


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def to_coordinate(value: Any) -> Optional[int]:
    """Parse an unsigned run of ASCII digits; anything else (signs, ``_``, other scripts) is None."""
    text = str(value).strip()
    if not _UNSIGNED_INT_RE.fullmatch(text):
        return None
    return int(text)


def to_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
