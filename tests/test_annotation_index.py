import pytest

from tdna_finder.modules.annotation_index import AnnotationIndex, parse_feature_row
from tdna_finder.utils.exceptions import InvalidInput, ParseError


def test_load_skips_malformed_rows(gff_rows):
    index = AnnotationIndex().load(gff_rows)
    assert len(index) == 12
    assert len(index.rejected) == 2
    assert all(isinstance(exc, ParseError) for exc in index.rejected)


def test_load_skips_undecodable_byte_rows():
    index = AnnotationIndex().load(
        [
            b"Chr1\t.\tgene\t1\t100\t.\t+\t.\tID=AT1G00010",
            b"Chr1\t.\tCDS\t10\t50\t.\t+\t0\tID=\xff\xfe;Parent=AT1G00010.1",
            b"Chr1\t.\tCDS\t60\t90\t.\t+\t0\tID=AT1G00010.1:CDS:1;Parent=AT1G00010.1",
        ]
    )
    assert len(index) == 2
    assert len(index.rejected) == 1
    assert index.rejected[0].row_number == 2
    assert [(i.start, i.end) for i in index.get_cds_intervals("AT1G00010")] == [(60, 90)]


@pytest.mark.parametrize("start, end", [("1_0", "2_0"), ("+5", "20"), ("\u0661\u0660", "20"), ("-5", "20")])
def test_load_rejects_non_digit_coordinates(start, end):
    index = AnnotationIndex().load([f"Chr1\t.\tgene\t{start}\t{end}\t.\t+\t.\tID=AT1G00010"])
    assert len(index) == 0
    assert len(index.rejected) == 1


def test_load_fails_when_no_row_has_nine_columns():
    with pytest.raises(ParseError):
        AnnotationIndex().load(["Chr1\tAraport11\tgene", "Chr1\tx"])


def test_load_accepts_empty_table():
    assert len(AnnotationIndex().load([])) == 0


def test_parse_feature_row_rejects_reversed_coordinates():
    with pytest.raises(ParseError):
        parse_feature_row(["Chr1", ".", "CDS", "200", "100", ".", "+", "0", "ID=X"], row_number=3)


def test_parse_feature_row_normalizes_unknown_strand():
    record = parse_feature_row(["Chr1", ".", "CDS", "1", "10", ".", "?", ".", "ID=X;Parent=Y,Z"])
    assert record.strand == "."
    assert record.feature_id == "X"
    assert record.parent_ids == ["Y", "Z"]


def test_get_features_uses_id_and_parent(gff_rows):
    index = AnnotationIndex().load(gff_rows)
    types = [record.type for record in index.get_features("AT1G25320")]
    assert types == ["gene", "mRNA", "exon", "five_prime_UTR", "CDS", "three_prime_UTR"]


def test_get_features_is_case_insensitive_and_filters_types(gff_rows):
    index = AnnotationIndex().load(gff_rows)
    records = index.get_features("at1g25320", types={"CDS", "five_prime_UTR"})
    assert [record.type for record in records] == ["five_prime_UTR", "CDS"]


def test_get_features_never_matches_identifier_substrings(gff_rows):
    index = AnnotationIndex().load(gff_rows)
    assert index.get_features("AT1G2532") == []
    assert index.get_gene_bounds("AT1G2532") is None


def test_get_features_by_transcript_id(gff_rows):
    index = AnnotationIndex().load(gff_rows)
    types = {record.type for record in index.get_features("AT1G25320.1")}
    assert types == {"mRNA", "exon", "five_prime_UTR", "CDS", "three_prime_UTR"}


def test_get_cds_intervals(gff_rows):
    index = AnnotationIndex().load(gff_rows)
    intervals = index.get_cds_intervals("AT1G25320")
    assert [(i.start, i.end) for i in intervals] == [(8863750, 8866120)]
    assert index.get_cds_intervals("AT3G01000") == []
    assert index.get_cds_intervals("AT9G99999") == []


def test_get_cds_intervals_merges_transcripts():
    rows = [
        "Chr2\t.\tgene\t1\t1000\t.\t+\t.\tID=AT2G00100",
        "Chr2\t.\tCDS\t100\t200\t.\t+\t0\tID=AT2G00100.1:CDS:1;Parent=AT2G00100.1",
        "Chr2\t.\tCDS\t150\t300\t.\t+\t0\tID=AT2G00100.2:CDS:1;Parent=AT2G00100.2",
        "Chr2\t.\tCDS\t301\t400\t.\t+\t0\tID=AT2G00100.2:CDS:2;Parent=AT2G00100.2",
        "Chr2\t.\tCDS\t600\t700\t.\t+\t0\tID=AT2G00100.1:CDS:2;Parent=AT2G00100.1",
    ]
    index = AnnotationIndex().load(rows)
    assert [(i.start, i.end) for i in index.get_cds_intervals("AT2G00100")] == [(100, 400), (600, 700)]


def test_get_gene_bounds(gff_rows):
    index = AnnotationIndex().load(gff_rows)
    bounds = index.get_gene_bounds("AT1G20330")
    assert (bounds.chromosome, bounds.start, bounds.end, bounds.strand) == ("Chr1", 7040000, 7042000, "-")
    assert index.get_gene_bounds("AT9G99999") is None


def test_get_gene_bounds_without_gene_record():
    rows = ["Chr4\t.\tCDS\t10\t20\t.\t-\t0\tID=AT4G00001.1:CDS:1;Parent=AT4G00001.1"]
    bounds = AnnotationIndex().load(rows).get_gene_bounds("AT4G00001")
    assert (bounds.chromosome, bounds.start, bounds.end, bounds.strand) == ("Chr4", 10, 20, "-")


def test_check_consistency_reports_mismatches():
    rows = [
        "Chr1\t.\tgene\t1\t100\t.\t+\t.\tID=AT1G00010",
        "Chr1\t.\tCDS\t10\t20\t.\t+\t0\tID=AT1G00010.1:CDS:1;Parent=AT1G00010.1",
        "Chr2\t.\tCDS\t30\t40\t.\t-\t0\tID=AT1G00010.1:CDS:2;Parent=AT1G00010.1",
    ]
    index = AnnotationIndex().load(rows)
    warnings = index.check_consistency("AT1G00010")
    assert len(warnings) == 1
    assert "Chr2" in warnings[0]
    assert len(index.get_features("AT1G00010", types={"CDS"})) == 2


def test_gene_ids(gff_rows):
    index = AnnotationIndex().load(gff_rows)
    assert index.gene_ids() == ["AT1G20330", "AT1G25320", "AT3G01000", "AT5G10000"]


def test_queries_reject_blank_gene_id(gff_rows):
    index = AnnotationIndex().load(gff_rows)
    with pytest.raises(InvalidInput):
        index.get_features("  ")
