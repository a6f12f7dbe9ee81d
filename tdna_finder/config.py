from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


ELIGIBLE_HIT_REGION = "Exon"
HOMOZYGOUS_STATUSES = frozenset({"HMc", "HMn"})
NOT_SENT_STATUS = "NotSent"

CONFIRMED_GENE_COLUMN = "Target Gene"
CONFIRMED_LINE_COLUMN = "T-DNA line"
CONFIRMED_HIT_REGION_COLUMN = "Hit region"
CONFIRMED_HM_COLUMN = "HM"
CONFIRMED_ABRC_COLUMN = "ABRC"
CONFIRMED_REQUIRED_COLUMNS = (
    CONFIRMED_GENE_COLUMN,
    CONFIRMED_LINE_COLUMN,
    CONFIRMED_HIT_REGION_COLUMN,
    CONFIRMED_HM_COLUMN,
    CONFIRMED_ABRC_COLUMN,
)

ANNOTATION_COLUMN_COUNT = 9

# 0-based columns of the headerless location table
LOCATION_LABEL_COLUMN = 0
LOCATION_CHROMOSOME_COLUMN = 3
LOCATION_POSITION_COLUMN = 4
LOCATION_MIN_COLUMNS = LOCATION_POSITION_COLUMN + 1

POSITION_PAIR_SEPARATOR = " vs "
LINE_LABEL_DELIMITERS = r"[._\-:|/\s]+"
GENE_ID_BOUNDARIES = (".", ":")

CDS_TYPE = "CDS"
GENE_TYPE = "gene"
BUNDLE_FEATURE_TYPES = ("CDS", "five_prime_UTR", "three_prime_UTR", "exon")
STRAND_VALUES = ("+", "-")
UNKNOWN_STRAND = "."

ANNOTATION_FILE = "Araport11_GFF3_genes_transposons.201606.gff.gz"
CONFIRMED_FILE = "sum_SALK_confirmed.txt.gz"
LOCATION_FILE = "T-DNAall.Genes.Araport11.txt.gz"

DATA_DIR = Path("data")
OUTPUT_DIR = Path("data/output")
OUTPUT_FILE_SUFFIX = ".tdna.json"
METADATA_FILE_SUFFIX = ".metadata.json"


@dataclass(frozen=True)
class EligibilityPolicy:
    hit_region: str = ELIGIBLE_HIT_REGION
    homozygosity_statuses: frozenset[str] = HOMOZYGOUS_STATUSES
    excluded_stock_status: str = NOT_SENT_STATUS
