from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FeatureRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    chromosome: str
    source: str = "."
    type: str
    start: int
    end: int
    score: Optional[float] = None
    strand: str = "."
    phase: Optional[int] = None
    attributes: str = ""
    row_number: Optional[int] = None

    @property
    def attribute_map(self) -> dict[str, str]:
        parsed: dict[str, str] = {}
        for item in self.attributes.split(";"):
            key, sep, value = item.partition("=")
            key = key.strip()
            if sep and key and key not in parsed:
                parsed[key] = value.strip()
        return parsed

    @property
    def feature_id(self) -> Optional[str]:
        return self.attribute_map.get("ID") or None

    @property
    def parent_ids(self) -> list[str]:
        raw = self.attribute_map.get("Parent", "")
        return [item.strip() for item in raw.split(",") if item.strip()]


class CDSInterval(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    def contains(self, position: int) -> bool:
        return self.start <= position <= self.end


class GeneBounds(BaseModel):
    chromosome: str
    start: int
    end: int
    strand: str


class ConfirmedInsertion(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_gene: str
    line_id: str
    hit_region: str
    homozygosity_status: str
    stock_center_status: str


class InsertionLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_label: str
    chromosome: str
    position: int
    raw_position: str = ""


class InsertionMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_id: str
    line_label: str
    chromosome: str
    position: int
    hit_region: str
    homozygosity_status: str
    stock_center_status: str


class GeneSummary(BaseModel):
    id: str
    chromosome: str
    start: int
    end: int
    strand: str


class BundleFeature(BaseModel):
    type: str
    chromosome: str
    start: int
    end: int
    strand: str
    feature_id: Optional[str] = None
    parent_ids: list[str] = Field(default_factory=list)


class VisualizationBundle(BaseModel):
    gene: GeneSummary
    features: list[BundleFeature]
    insertions: list[InsertionMatch]
    cds_intervals: list[CDSInterval] = Field(default_factory=list)
    has_coding_sequence: bool = False
    warnings: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
