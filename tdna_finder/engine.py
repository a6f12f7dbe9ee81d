"""Load-once, query-many entry points.

``load_all`` parses the three tables into an :class:`EngineHandle`; every query
takes that handle explicitly, so separate sessions never share state and the
handle can be queried concurrently once loaded.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .config import EligibilityPolicy
from .models.data_schemas import InsertionMatch, VisualizationBundle
from .modules.annotation_index import AnnotationIndex
from .modules.bundle_builder import VisualizationBundleBuilder
from .modules.insertion_registry import InsertionRegistry
from .modules.location_index import LocationIndex
from .modules.overlap_resolver import OverlapResolver


logger = logging.getLogger(__name__)


@dataclass
class EngineHandle:
    annotation: AnnotationIndex
    registry: InsertionRegistry
    locations: LocationIndex
    resolver: OverlapResolver = field(init=False)
    builder: VisualizationBundleBuilder = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = OverlapResolver(self.annotation, self.registry, self.locations)
        self.builder = VisualizationBundleBuilder(self.annotation, self.resolver)

    def load_summary(self) -> dict[str, Any]:
        return {
            "annotation_features": len(self.annotation),
            "annotation_rejected": len(self.annotation.rejected),
            "confirmed_rows": self.registry.total_rows,
            "confirmed_eligible": self.registry.eligible_count,
            "confirmed_rejected": len(self.registry.rejected),
            "locations": len(self.locations),
            "locations_dropped": self.locations.dropped,
        }


def load_all(
    annotation_rows: Iterable[Any],
    confirmed_rows: Iterable[Any],
    location_rows: Iterable[Any],
    policy: Optional[EligibilityPolicy] = None,
) -> EngineHandle:
    handle = EngineHandle(
        annotation=AnnotationIndex().load(annotation_rows),
        registry=InsertionRegistry(policy).load(confirmed_rows),
        locations=LocationIndex().load(location_rows),
    )
    logger.info("T-DNA datasets loaded: %s", handle.load_summary())
    return handle


def get_tdna_lines(handle: EngineHandle, gene_id: str) -> list[str]:
    return handle.resolver.resolve(gene_id).line_ids()


def get_tdna_line_details(handle: EngineHandle, gene_id: str) -> list[InsertionMatch]:
    return handle.resolver.resolve(gene_id).matches


def get_visualization_bundle(handle: EngineHandle, gene_id: str) -> VisualizationBundle:
    return handle.builder.build(gene_id)


def get_genes_for_line(handle: EngineHandle, line_id: str) -> list[str]:
    return handle.registry.genes_for_line(line_id)


def list_genes(handle: EngineHandle, annotated: bool = False) -> list[str]:
    """Genes with at least one eligible line, or every annotated gene when ``annotated``."""
    if annotated:
        return handle.annotation.gene_ids()
    return handle.registry.genes()
