import pytest

from tdna_finder.engine import load_all


def _tsv(*fields):
    return "\t".join(str(field) for field in fields)


GFF_ROWS = [
    "##gff-version 3",
    _tsv("Chr1", "Araport11", "gene", 8863550, 8866320, ".", "+", ".", "ID=AT1G25320;Name=AT1G25320"),
    _tsv("Chr1", "Araport11", "mRNA", 8863550, 8866320, ".", "+", ".", "ID=AT1G25320.1;Parent=AT1G25320"),
    _tsv("Chr1", "Araport11", "exon", 8863550, 8866320, ".", "+", ".", "ID=AT1G25320.1:exon:1;Parent=AT1G25320.1"),
    _tsv("Chr1", "Araport11", "five_prime_UTR", 8863550, 8863749, ".", "+", ".", "ID=AT1G25320.1:five_prime_UTR:1;Parent=AT1G25320.1"),
    _tsv("Chr1", "Araport11", "CDS", 8863750, 8866120, ".", "+", "0", "ID=AT1G25320.1:CDS:1;Parent=AT1G25320.1"),
    _tsv("Chr1", "Araport11", "three_prime_UTR", 8866121, 8866320, ".", "+", ".", "ID=AT1G25320.1:three_prime_UTR:1;Parent=AT1G25320.1"),
    _tsv("Chr1", "Araport11", "gene", 7040000, 7042000, ".", "-", ".", "ID=AT1G20330;Name=AT1G20330"),
    _tsv("Chr1", "Araport11", "CDS", 7040100, 7041900, ".", "-", "0", "ID=AT1G20330.1:CDS:1;Parent=AT1G20330.1"),
    _tsv("Chr3", "Araport11", "gene", 50, 500, ".", "+", ".", "ID=AT3G01000;Name=AT3G01000"),
    _tsv("Chr3", "Araport11", "exon", 50, 500, ".", "+", ".", "ID=AT3G01000.1:exon:1;Parent=AT3G01000.1"),
    _tsv("Chr5", "Araport11", "gene", 900, 2100, ".", "+", ".", "ID=AT5G10000;Name=AT5G10000"),
    _tsv("Chr5", "Araport11", "CDS", 1000, 2000, ".", "+", "0", "ID=AT5G10000.1:CDS:1;Parent=AT5G10000.1"),
    _tsv("Chr1", "Araport11", "CDS", "not-a-number", 10, ".", "+", "0", "ID=BROKEN.1:CDS:1;Parent=BROKEN.1"),
    _tsv("Chr1", "Araport11", "CDS", 10),
]

CONFIRMED_ROWS = [
    _tsv("Target Gene", "T-DNA line", "Hit region", "HM", "ABRC"),
    _tsv("at1g25320", "SALK_019496", "Exon", "HMc", "Sent"),
    _tsv("AT1G25320", "SALK_064305", "Exon", "HMn", "Sent"),
    _tsv("AT1G25320", "SALK_111111", "Intron", "HMc", "Sent"),
    _tsv("AT1G25320", "SALK_222222", "Exon", "HZ", "Sent"),
    _tsv("AT1G25320", "SALK_333333", "Exon", "HMc", "NotSent"),
    _tsv("AT1G25320", "SALK_1", "Exon", "HMc", "Sent"),
    _tsv("AT3G01000", "SALK_300000", "Exon", "HMc", "Sent"),
    _tsv("AT5G10000", "SALK_400000", "Exon", "HMc", "Sent"),
    _tsv("AT9G99999", "SALK_500000", "Exon", "HMc", "Sent"),
]

LOCATION_ROWS = [
    _tsv("SALK_019496.1.x", "T-DNA", "+", "Chr1", "8864721-8864722 vs 0-0"),
    _tsv("SALK_019496.2.x", "T-DNA", "+", "Chr1", "8864721-8864722 vs 0-0"),
    _tsv("SALK_064305.50.x", "T-DNA", "-", "Chr1", "8864989-8864990 vs 0-0"),
    _tsv("SALK_064305.51.x", "T-DNA", "-", "Chr1", "8866300-8866301 vs 0-0"),
    _tsv("SALK_064305.52.x", "T-DNA", "-", "Chr1", "8865500-8865501 vs 0-0"),
    _tsv("SALK_1.1.x", "T-DNA", "+", "Chr1", "8863700-8863701 vs 0-0"),
    _tsv("SALK_10.1.x", "T-DNA", "+", "Chr1", "8865000-8865001 vs 0-0"),
    _tsv("SALK_111111.1.x", "T-DNA", "+", "Chr1", "8864000-8864001 vs 0-0"),
    _tsv("SALK_300000.1.x", "T-DNA", "+", "Chr3", "100-101 vs 0-0"),
    _tsv("SALK_400000.1.x", "T-DNA", "+", "Chr5", "5000-5001 vs 0-0"),
    _tsv("SALK_999999.1.x", "T-DNA", "+", "Chr1", "no position recorded"),
    _tsv("short", "row"),
]


@pytest.fixture
def gff_rows():
    return list(GFF_ROWS)


@pytest.fixture
def confirmed_rows():
    return list(CONFIRMED_ROWS)


@pytest.fixture
def location_rows():
    return list(LOCATION_ROWS)


@pytest.fixture
def handle():
    return load_all(GFF_ROWS, CONFIRMED_ROWS, LOCATION_ROWS)
