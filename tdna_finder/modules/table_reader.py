from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import Optional

from ..config import ANNOTATION_FILE, CONFIRMED_FILE, LOCATION_FILE, EligibilityPolicy
from ..engine import EngineHandle, load_all
from ..utils.exceptions import DataFileNotFound


logger = logging.getLogger(__name__)


def read_table_lines(path: Path) -> list[str]:
    """Text lines of a plain or gzip-compressed table."""
    path = Path(path)
    if not path.exists():
        raise DataFileNotFound(f"File not found: {path}")
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8", errors="replace") as handle:
            return handle.read().splitlines()
    return path.read_text(encoding="utf-8", errors="replace").splitlines()


def _find_table(data_dir: Path, file_name: str) -> Path:
    candidate = data_dir / file_name
    if candidate.exists():
        return candidate
    if file_name.endswith(".gz"):
        plain = data_dir / file_name[: -len(".gz")]
        if plain.exists():
            return plain
    raise DataFileNotFound(f"File not found: {candidate}")


def load_data_dir(
    data_dir: Path,
    annotation_file: str = ANNOTATION_FILE,
    confirmed_file: str = CONFIRMED_FILE,
    location_file: str = LOCATION_FILE,
    policy: Optional[EligibilityPolicy] = None,
) -> EngineHandle:
    data_dir = Path(data_dir)
    paths = {
        "annotation": _find_table(data_dir, annotation_file),
        "confirmed": _find_table(data_dir, confirmed_file),
        "location": _find_table(data_dir, location_file),
    }
    for name, path in paths.items():
        logger.info("reading %s table from %s", name, path)
    return load_all(
        read_table_lines(paths["annotation"]),
        read_table_lines(paths["confirmed"]),
        read_table_lines(paths["location"]),
        policy=policy,
    )
