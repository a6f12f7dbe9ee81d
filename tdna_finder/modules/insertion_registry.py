from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..config import (
    CONFIRMED_ABRC_COLUMN,
    CONFIRMED_GENE_COLUMN,
    CONFIRMED_HIT_REGION_COLUMN,
    CONFIRMED_HM_COLUMN,
    CONFIRMED_LINE_COLUMN,
    CONFIRMED_REQUIRED_COLUMNS,
    EligibilityPolicy,
)
from ..models.data_schemas import ConfirmedInsertion
from ..utils.exceptions import ParseError
from ..utils.id_utils import normalize_gene_id, normalize_line_id
from ..utils.table_utils import iter_rows


logger = logging.getLogger(__name__)


def is_eligible(row: ConfirmedInsertion, policy: EligibilityPolicy) -> bool:
    return (
        row.hit_region == policy.hit_region
        and row.homozygosity_status in policy.homozygosity_statuses
        and row.stock_center_status != policy.excluded_stock_status
    )


class InsertionRegistry:
    def __init__(self, policy: Optional[EligibilityPolicy] = None) -> None:
        self.policy = policy or EligibilityPolicy()
        self.rejected: list[ParseError] = []
        self.total_rows = 0
        self._by_gene: dict[str, list[ConfirmedInsertion]] = {}
        self._by_line: dict[str, set[str]] = {}

    def load(self, rows: Iterable[Any]) -> "InsertionRegistry":
        columns: Optional[dict[str, int]] = None
        width = 0
        seen: set[tuple[str, str]] = set()
        for row_number, fields in iter_rows(rows, on_error=self._reject):
            if columns is None:
                header = [field.strip().lstrip("\ufeff") for field in fields]
                missing = [name for name in CONFIRMED_REQUIRED_COLUMNS if name not in header]
                if missing:
                    raise ParseError(
                        f"confirmed-insertion header is missing columns: {', '.join(missing)}",
                        row_number=row_number,
                    )
                columns = {name: header.index(name) for name in CONFIRMED_REQUIRED_COLUMNS}
                width = max(columns.values()) + 1
                continue

            self.total_rows += 1
            if len(fields) < width:
                self._reject(ParseError(f"expected at least {width} columns, got {len(fields)}", row_number=row_number))
                continue

            values = {name: fields[idx].strip() for name, idx in columns.items()}
            if not values[CONFIRMED_GENE_COLUMN] or not values[CONFIRMED_LINE_COLUMN]:
                self._reject(ParseError("empty target gene or line id", row_number=row_number))
                continue

            row = ConfirmedInsertion(
                target_gene=values[CONFIRMED_GENE_COLUMN].upper(),
                line_id=values[CONFIRMED_LINE_COLUMN],
                hit_region=values[CONFIRMED_HIT_REGION_COLUMN],
                homozygosity_status=values[CONFIRMED_HM_COLUMN],
                stock_center_status=values[CONFIRMED_ABRC_COLUMN],
            )
            if not is_eligible(row, self.policy):
                continue
            key = (row.target_gene, row.line_id.upper())
            if key in seen:
                logger.debug("duplicate confirmed insertion %s/%s at row %d", row.target_gene, row.line_id, row_number)
                continue
            seen.add(key)
            self._by_gene.setdefault(row.target_gene, []).append(row)
            self._by_line.setdefault(row.line_id.upper(), set()).add(row.target_gene)

        if columns is None:
            raise ParseError("confirmed-insertion table has no header row")
        logger.info(
            "confirmed insertions loaded: %d eligible of %d rows across %d genes",
            self.eligible_count,
            self.total_rows,
            len(self._by_gene),
        )
        return self

    def _reject(self, exc: ParseError) -> None:
        logger.warning("skipping confirmed-insertion %s", exc)
        self.rejected.append(exc)

    @property
    def eligible_count(self) -> int:
        return sum(len(bucket) for bucket in self._by_gene.values())

    def get_eligible_lines(self, gene_id: str) -> list[ConfirmedInsertion]:
        return list(self._by_gene.get(normalize_gene_id(gene_id), []))

    def genes_for_line(self, line_id: str) -> list[str]:
        return sorted(self._by_line.get(normalize_line_id(line_id), set()))

    def genes(self) -> list[str]:
        return sorted(self._by_gene)
