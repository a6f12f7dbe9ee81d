from __future__ import annotations

import re
from typing import Any, Optional

from ..config import GENE_ID_BOUNDARIES, LINE_LABEL_DELIMITERS, POSITION_PAIR_SEPARATOR
from .exceptions import InvalidInput


_LINE_TOKEN_SPLIT_RE = re.compile(LINE_LABEL_DELIMITERS)
_DIGITS_RE = re.compile(r"^\d+$")


def normalize_gene_id(raw: Any) -> str:
    if not isinstance(raw, str):
        raise InvalidInput(f"Gene ID must be a string (e.g. \"AT1G25320\"), got {type(raw).__name__}")
    cleaned = raw.strip()
    if not cleaned:
        raise InvalidInput("Gene ID must not be empty")
    return cleaned.upper()


def normalize_line_id(raw: Any) -> str:
    if not isinstance(raw, str):
        raise InvalidInput(f"T-DNA line ID must be a string (e.g. \"SALK_019496\"), got {type(raw).__name__}")
    cleaned = raw.strip()
    if not cleaned:
        raise InvalidInput("T-DNA line ID must not be empty")
    return cleaned.upper()


def identifier_prefixes(identifier: str) -> list[str]:
    """Every boundary-anchored prefix of an annotation identifier, uppercased.

    ``AT1G25320.1:CDS:1`` yields ``AT1G25320``, ``AT1G25320.1``,
    ``AT1G25320.1:CDS`` and the full identifier. A gene is referenced by a
    feature only through one of these, never through an arbitrary substring.
    """
    ident = identifier.strip().upper()
    if not ident:
        return []
    prefixes = [ident[:i] for i, ch in enumerate(ident) if ch in GENE_ID_BOUNDARIES and i > 0]
    prefixes.append(ident)
    return list(dict.fromkeys(prefixes))


def tokenize_line_label(label: str) -> tuple[str, ...]:
    return tuple(token for token in _LINE_TOKEN_SPLIT_RE.split(label.strip().upper()) if token)


def label_matches_line(label_tokens: tuple[str, ...], line_tokens: tuple[str, ...]) -> bool:
    if not line_tokens or len(label_tokens) < len(line_tokens):
        return False
    return label_tokens[: len(line_tokens)] == line_tokens


def extract_primary_position(raw: Any) -> Optional[int]:
    """First dash-delimited number before the first " vs " token.

    ``"8864721-8864722 vs 0-0"`` gives ``8864721``; anything without a
    numeric prefix gives ``None``.
    """
    if raw is None:
        return None
    text = str(raw)
    primary = text.split(POSITION_PAIR_SEPARATOR, 1)[0]
    head = primary.split("-", 1)[0].strip()
    if not _DIGITS_RE.match(head):
        return None
    return int(head)
