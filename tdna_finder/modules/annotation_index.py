from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..config import ANNOTATION_COLUMN_COUNT, CDS_TYPE, GENE_TYPE, STRAND_VALUES, UNKNOWN_STRAND
from ..models.data_schemas import CDSInterval, FeatureRecord, GeneBounds
from ..utils.coord_utils import build_region_string, span_of, to_cds_intervals
from ..utils.exceptions import ParseError
from ..utils.id_utils import identifier_prefixes, normalize_gene_id
from ..utils.table_utils import iter_rows, to_coordinate, to_float, to_int


logger = logging.getLogger(__name__)


def parse_feature_row(fields: list[str], row_number: Optional[int] = None) -> FeatureRecord:
    if len(fields) < ANNOTATION_COLUMN_COUNT:
        raise ParseError(
            f"expected {ANNOTATION_COLUMN_COUNT} columns, got {len(fields)}",
            row_number=row_number,
        )
    chromosome, source, feature_type, start_raw, end_raw, score, strand, phase, attributes = (
        field.strip() for field in fields[:ANNOTATION_COLUMN_COUNT]
    )
    start = to_coordinate(start_raw)
    end = to_coordinate(end_raw)
    if start is None or end is None:
        raise ParseError(f"non-integer start/end: {start_raw!r}/{end_raw!r}", row_number=row_number)
    if start > end:
        raise ParseError(f"start {start} is greater than end {end}", row_number=row_number)
    return FeatureRecord(
        chromosome=chromosome,
        source=source or ".",
        type=feature_type,
        start=start,
        end=end,
        score=to_float(score),
        strand=strand if strand in STRAND_VALUES else UNKNOWN_STRAND,
        phase=to_int(phase),
        attributes=attributes,
        row_number=row_number,
    )


class AnnotationIndex:
    """Feature table indexed by every identifier a feature can be looked up by.

    A record is filed under each boundary-anchored prefix of its ``ID`` and
    ``Parent`` values (see ``identifier_prefixes``), so a CDS with
    ``Parent=AT1G25320.1`` is found for both ``AT1G25320.1`` and ``AT1G25320``
    while ``AT1G2532`` finds nothing.
    """

    def __init__(self) -> None:
        self.records: list[FeatureRecord] = []
        self.rejected: list[ParseError] = []
        self._by_gene: dict[str, list[int]] = {}
        self._gene_records: dict[str, int] = {}

    def load(self, rows: Iterable[Any]) -> "AnnotationIndex":
        data_rows = 0
        wide_rows = 0
        for row_number, fields in iter_rows(rows, skip_comments=True, on_error=self._reject):
            data_rows += 1
            if len(fields) >= ANNOTATION_COLUMN_COUNT:
                wide_rows += 1
            try:
                record = parse_feature_row(fields, row_number=row_number)
            except ParseError as exc:
                self._reject(exc)
                continue
            self._add(record)

        if data_rows and not wide_rows:
            raise ParseError(
                f"annotation table has no rows with {ANNOTATION_COLUMN_COUNT} columns; is this a GFF file?"
            )
        logger.info(
            "annotation loaded: %d features, %d genes indexed, %d rows rejected",
            len(self.records),
            len(self._gene_records),
            len(self.rejected),
        )
        return self

    def _reject(self, exc: ParseError) -> None:
        logger.warning("skipping annotation %s", exc)
        self.rejected.append(exc)

    def _add(self, record: FeatureRecord) -> None:
        idx = len(self.records)
        self.records.append(record)
        keys: list[str] = []
        feature_id = record.feature_id
        if feature_id:
            keys.extend(identifier_prefixes(feature_id))
            if record.type == GENE_TYPE:
                self._gene_records.setdefault(feature_id.strip().upper(), idx)
        for parent in record.parent_ids:
            keys.extend(identifier_prefixes(parent))
        for key in dict.fromkeys(keys):
            self._by_gene.setdefault(key, []).append(idx)

    def __len__(self) -> int:
        return len(self.records)

    def gene_ids(self) -> list[str]:
        return sorted(self._gene_records)

    def get_features(self, gene_id: str, types: Optional[Iterable[str]] = None) -> list[FeatureRecord]:
        key = normalize_gene_id(gene_id)
        records = [self.records[idx] for idx in self._by_gene.get(key, [])]
        if types is None:
            return records
        wanted = set(types)
        return [record for record in records if record.type in wanted]

    def get_cds_intervals(self, gene_id: str) -> list[CDSInterval]:
        cds = self.get_features(gene_id, types=(CDS_TYPE,))
        return to_cds_intervals((record.start, record.end) for record in cds)

    def _gene_record(self, key: str) -> Optional[FeatureRecord]:
        idx = self._gene_records.get(key)
        return self.records[idx] if idx is not None else None

    def get_gene_bounds(self, gene_id: str) -> Optional[GeneBounds]:
        key = normalize_gene_id(gene_id)
        records = self.get_features(key)
        span = span_of((record.start, record.end) for record in records)
        if span is None:
            return None
        anchor = self._gene_record(key) or records[0]
        return GeneBounds(chromosome=anchor.chromosome, start=span[0], end=span[1], strand=anchor.strand)

    def check_consistency(self, gene_id: str) -> list[str]:
        """Report features that disagree with the gene record's chromosome or strand."""
        key = normalize_gene_id(gene_id)
        gene = self._gene_record(key)
        if gene is None:
            return []
        warnings: list[str] = []
        for record in self.get_features(key):
            if record.chromosome != gene.chromosome or record.strand != gene.strand:
                location = build_region_string(record.chromosome, record.start, record.end, record.strand)
                expected = f"{gene.chromosome}:{gene.strand}"
                warnings.append(
                    f"{key}: {record.type} {record.feature_id or '(no ID)'} at {location} "
                    f"disagrees with gene record {expected}"
                )
        for warning in warnings:
            logger.warning("inconsistent annotation: %s", warning)
        return warnings
