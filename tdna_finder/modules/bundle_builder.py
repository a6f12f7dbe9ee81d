from __future__ import annotations

import logging
from collections import Counter

from ..config import BUNDLE_FEATURE_TYPES
from ..models.data_schemas import BundleFeature, GeneSummary, VisualizationBundle
from ..utils.coord_utils import build_region_string
from ..utils.exceptions import GeneNotFound
from ..utils.id_utils import normalize_gene_id
from .annotation_index import AnnotationIndex
from .overlap_resolver import OverlapResolver


logger = logging.getLogger(__name__)


class VisualizationBundleBuilder:
    def __init__(self, annotation: AnnotationIndex, resolver: OverlapResolver) -> None:
        self.annotation = annotation
        self.resolver = resolver

    def build(self, gene_id: str) -> VisualizationBundle:
        gene = normalize_gene_id(gene_id)
        bounds = self.annotation.get_gene_bounds(gene)
        if bounds is None:
            raise GeneNotFound(gene)

        records = sorted(
            self.annotation.get_features(gene, BUNDLE_FEATURE_TYPES),
            key=lambda item: (item.start, item.end, item.type),
        )
        features = [
            BundleFeature(
                type=record.type,
                chromosome=record.chromosome,
                start=record.start,
                end=record.end,
                strand=record.strand,
                feature_id=record.feature_id,
                parent_ids=record.parent_ids,
            )
            for record in records
        ]
        overlap = self.resolver.resolve(gene)
        warnings = [*self.annotation.check_consistency(gene), *overlap.warnings]

        bundle = VisualizationBundle(
            gene=GeneSummary(
                id=gene,
                chromosome=bounds.chromosome,
                start=bounds.start,
                end=bounds.end,
                strand=bounds.strand,
            ),
            features=features,
            insertions=overlap.matches,
            cds_intervals=overlap.cds_intervals,
            has_coding_sequence=overlap.has_coding_sequence,
            warnings=warnings,
            metadata={
                "region": build_region_string(bounds.chromosome, bounds.start, bounds.end, bounds.strand),
                "eligible_lines": overlap.eligible_line_ids,
                "feature_counts": dict(Counter(feature.type for feature in features)),
                "n_insertions": len(overlap.matches),
            },
        )
        logger.debug("%s: bundle with %d features, %d insertions", gene, len(features), len(overlap.matches))
        return bundle
