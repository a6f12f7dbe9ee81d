from __future__ import annotations

import logging
from typing import Any, Iterable

from ..config import (
    LOCATION_CHROMOSOME_COLUMN,
    LOCATION_LABEL_COLUMN,
    LOCATION_MIN_COLUMNS,
    LOCATION_POSITION_COLUMN,
)
from ..models.data_schemas import InsertionLocation
from ..utils.exceptions import ParseError
from ..utils.id_utils import extract_primary_position, label_matches_line, normalize_line_id, tokenize_line_label
from ..utils.table_utils import iter_rows


logger = logging.getLogger(__name__)


class LocationIndex:
    """Insertion coordinates keyed by the tokens of their line labels.

    Labels such as ``SALK_019496.1.x`` carry a sub-line suffix, so a line id
    matches a label when its tokens are a leading run of the label's tokens.
    Locations are bucketed by first token to keep lookups cheap.
    """

    def __init__(self) -> None:
        self.locations: list[InsertionLocation] = []
        self.dropped = 0
        self._tokens: list[tuple[str, ...]] = []
        self._by_first_token: dict[str, list[int]] = {}

    def load(self, rows: Iterable[Any]) -> "LocationIndex":
        data_rows = 0
        wide_rows = 0
        for row_number, fields in iter_rows(rows, on_error=self._drop_undecodable):
            data_rows += 1
            if len(fields) < LOCATION_MIN_COLUMNS:
                logger.warning(
                    "dropping location row %d: expected %d columns, got %d",
                    row_number,
                    LOCATION_MIN_COLUMNS,
                    len(fields),
                )
                self.dropped += 1
                continue
            wide_rows += 1

            label = fields[LOCATION_LABEL_COLUMN].strip()
            raw_position = fields[LOCATION_POSITION_COLUMN].strip()
            position = extract_primary_position(raw_position)
            tokens = tokenize_line_label(label)
            if position is None or not tokens:
                logger.warning("dropping location row %d: unusable label/position %r/%r", row_number, label, raw_position)
                self.dropped += 1
                continue
            self._add(
                InsertionLocation(
                    line_label=label,
                    chromosome=fields[LOCATION_CHROMOSOME_COLUMN].strip(),
                    position=position,
                    raw_position=raw_position,
                ),
                tokens,
            )

        if data_rows and not wide_rows:
            raise ParseError(f"location table has no rows with {LOCATION_MIN_COLUMNS} columns")
        logger.info("insertion locations loaded: %d kept, %d dropped", len(self.locations), self.dropped)
        return self

    def _drop_undecodable(self, exc: ParseError) -> None:
        logger.warning("dropping location %s", exc)
        self.dropped += 1

    def _add(self, location: InsertionLocation, tokens: tuple[str, ...]) -> None:
        idx = len(self.locations)
        self.locations.append(location)
        self._tokens.append(tokens)
        self._by_first_token.setdefault(tokens[0], []).append(idx)

    def __len__(self) -> int:
        return len(self.locations)

    def resolve(self, line_id: str) -> list[InsertionLocation]:
        line_tokens = tokenize_line_label(normalize_line_id(line_id))
        if not line_tokens:
            return []
        return [
            self.locations[idx]
            for idx in self._by_first_token.get(line_tokens[0], [])
            if label_matches_line(self._tokens[idx], line_tokens)
        ]
