from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..models.data_schemas import CDSInterval, InsertionMatch
from ..utils.coord_utils import position_in_intervals
from ..utils.id_utils import normalize_gene_id
from .annotation_index import AnnotationIndex
from .insertion_registry import InsertionRegistry
from .location_index import LocationIndex


logger = logging.getLogger(__name__)


@dataclass
class OverlapResult:
    gene_id: str
    matches: list[InsertionMatch] = field(default_factory=list)
    cds_intervals: list[CDSInterval] = field(default_factory=list)
    eligible_line_ids: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def has_coding_sequence(self) -> bool:
        return bool(self.cds_intervals)

    def line_ids(self) -> list[str]:
        return list(dict.fromkeys(match.line_id for match in self.matches))


class OverlapResolver:
    def __init__(
        self,
        annotation: AnnotationIndex,
        registry: InsertionRegistry,
        locations: LocationIndex,
    ) -> None:
        self.annotation = annotation
        self.registry = registry
        self.locations = locations

    def resolve(self, gene_id: str) -> OverlapResult:
        gene = normalize_gene_id(gene_id)
        cds = self.annotation.get_cds_intervals(gene)
        result = OverlapResult(gene_id=gene, cds_intervals=cds)

        eligible = self.registry.get_eligible_lines(gene)
        result.eligible_line_ids = list(dict.fromkeys(row.line_id for row in eligible))
        if not eligible:
            logger.debug("%s: no eligible insertion lines", gene)
            return result
        if not cds:
            result.warnings.append(
                f"{gene}: {len(result.eligible_line_ids)} eligible insertion line(s) but no CDS features in annotation"
            )
            logger.debug("%s: no coding sequence to match against", gene)
            return result

        seen: set[tuple[str, str, int]] = set()
        matches: list[InsertionMatch] = []
        for row in eligible:
            for location in self.locations.resolve(row.line_id):
                if not position_in_intervals(location.position, cds):
                    continue
                key = (row.line_id, location.chromosome, location.position)
                if key in seen:
                    continue
                seen.add(key)
                matches.append(
                    InsertionMatch(
                        line_id=row.line_id,
                        line_label=location.line_label,
                        chromosome=location.chromosome,
                        position=location.position,
                        hit_region=row.hit_region,
                        homozygosity_status=row.homozygosity_status,
                        stock_center_status=row.stock_center_status,
                    )
                )

        result.matches = sorted(matches, key=lambda match: (match.position, match.line_id, match.chromosome))
        logger.debug(
            "%s: %d eligible line(s), %d insertion(s) inside CDS",
            gene,
            len(result.eligible_line_ids),
            len(result.matches),
        )
        return result
