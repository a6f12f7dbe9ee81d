from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..config import METADATA_FILE_SUFFIX, OUTPUT_FILE_SUFFIX
from ..models.data_schemas import VisualizationBundle


def output_paths(outdir: Path, gene_id: str) -> tuple[Path, Path]:
    base = "".join(ch if ch.isalnum() or ch in "._-" else "_" for ch in gene_id)
    return outdir / f"{base}{OUTPUT_FILE_SUFFIX}", outdir / f"{base}{METADATA_FILE_SUFFIX}"


def write_outputs(
    bundle: VisualizationBundle,
    outdir: Path,
    write_metadata_json: bool = True,
    load_summary: Optional[dict[str, Any]] = None,
) -> tuple[Path, Path | None]:
    outdir.mkdir(parents=True, exist_ok=True)
    bundle_path, json_path = output_paths(outdir, bundle.gene.id)
    bundle_path.write_text(
        json.dumps(bundle.model_dump(mode="json"), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )

    if write_metadata_json:
        metadata = dict(bundle.metadata)
        metadata.setdefault("gene_id", bundle.gene.id)
        metadata.setdefault("run_timestamp", datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"))
        metadata.setdefault("has_coding_sequence", bundle.has_coding_sequence)
        metadata.setdefault("warnings", list(bundle.warnings))
        if load_summary is not None:
            metadata.setdefault("load_summary", load_summary)
        json_path.write_text(json.dumps(metadata, indent=2, ensure_ascii=False), encoding="utf-8")
    else:
        json_path = None
    return bundle_path, json_path
