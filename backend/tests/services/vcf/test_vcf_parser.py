"""
Unit tests for the VCF record parser.
Covers header handling, gene filtering and INFO field extraction.
"""

from pharmarisk.services.vcf.parser import (
    MISSING_HEADER_REASON,
    TARGET_PHARMACOGENES,
    VariantRecord,
    _parse_info_field,
    parse_vcf,
)


class TestHeader:

    def test_missing_chrom_header_fails(self, make_vcf, vcf_record):
        text = make_vcf(
            [vcf_record("chr22", 42130692, "rs3892097", "G", "A", "GENE=CYP2D6;STAR=*4")],
            header=False,
        )

        result = parse_vcf(text)

        assert not result.success
        assert result.error_reason == MISSING_HEADER_REASON
        assert result.gene_variants == {}
        assert result.variants_found == 0

    def test_empty_content_fails(self):
        result = parse_vcf("")
        assert not result.success

    def test_patient_id_from_sample_column(self, make_vcf):
        result = parse_vcf(make_vcf(sample="NA12878"))

        assert result.success
        assert result.patient_id == "NA12878"

    def test_patient_id_defaults_without_sample_column(self, make_vcf):
        result = parse_vcf(make_vcf(sample=None))
        assert result.patient_id == "PATIENT_XXX"

    def test_whitespace_delimited_header(self):
        text = "##fileformat=VCFv4.2\n#CHROM POS ID REF ALT QUAL FILTER INFO FORMAT SAMPLE_9\n"
        assert parse_vcf(text).patient_id == "SAMPLE_9"

    def test_first_header_wins(self, make_vcf):
        text = make_vcf(["\t".join(["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT", "OTHER"])])
        assert parse_vcf(text).patient_id == "PATIENT_001"

    def test_header_only_yields_empty_index(self, make_vcf):
        result = parse_vcf(make_vcf())

        assert result.success
        assert list(result.gene_variants) == list(TARGET_PHARMACOGENES)
        assert all(v == [] for v in result.gene_variants.values())
        assert result.variants_found == 0
        assert result.genes_covered == []

    def test_bytes_input(self, make_vcf, vcf_record):
        text = make_vcf([vcf_record("chr10", 94781859, "rs4244285", "G", "A", "GENE=CYP2C19;STAR=*2")])
        result = parse_vcf(text.encode("utf-8"))

        assert result.success
        assert result.variants_found == 1

    def test_windows_line_endings(self, make_vcf, vcf_record):
        text = make_vcf([vcf_record("chr10", 94781859, "rs4244285", "G", "A", "GENE=CYP2C19;STAR=*2")])
        result = parse_vcf(text.replace("\n", "\r\n"))

        assert result.patient_id == "PATIENT_001"
        assert result.gene_variants["CYP2C19"][0].star == "*2"

    def test_control_characters_do_not_split_lines(self, make_vcf, vcf_record):
        text = make_vcf([vcf_record("chr22", 42130692, "rs3892097", "G", "A", "GENE=CYP2D6;NOTE=a\x0cb\x1e c;STAR=*4")])
        result = parse_vcf(text)

        assert result.variants_found == 1
        assert result.malformed_lines == 0
        assert result.gene_variants["CYP2D6"][0].star == "*4"


class TestRecords:

    def test_record_fields(self, make_vcf, vcf_record):
        text = make_vcf([vcf_record("chr22", 42130692, "rs3892097", "G", "A", "GENE=CYP2D6;STAR=*4/*4;RS=rs3892097")])

        result = parse_vcf(text)

        assert result.gene_variants["CYP2D6"] == [
            VariantRecord(
                rsid="rs3892097",
                gene="CYP2D6",
                star="*4/*4",
                chrom="chr22",
                pos="42130692",
                ref="G",
                alt="A",
            )
        ]
        assert result.variants_found == 1
        assert result.genes_covered == ["CYP2D6"]

    def test_off_target_and_missing_genes_are_discarded(self, make_vcf, vcf_record):
        text = make_vcf([
            vcf_record("chr7", 117559590, "rs113993960", "ATCT", "A", "GENE=CFTR"),
            vcf_record("chr1", 925952, "rs2799066", "G", "A", "DP=30"),
            vcf_record("chr1", 97450058, "rs67376798", "T", "A", "GENE=DPYD"),
        ])

        result = parse_vcf(text)

        assert result.variants_found == 1
        assert result.off_target_records == 2
        for gene, records in result.gene_variants.items():
            assert gene in TARGET_PHARMACOGENES
            assert all(r.gene == gene for r in records)
        assert [r.rsid for r in result.gene_variants["DPYD"]] == ["rs67376798"]

    def test_gene_is_case_normalized(self, make_vcf, vcf_record):
        text = make_vcf([vcf_record("chr6", 18130918, "rs1800460", "C", "T", "GENE=tpmt;STAR=*3B")])
        result = parse_vcf(text)
        assert len(result.gene_variants["TPMT"]) == 1

    def test_short_lines_are_skipped(self, make_vcf):
        text = make_vcf(["chr22\t42130692\trs3892097\tG\tA\t99\tPASS", "garbage"])

        result = parse_vcf(text)

        assert result.success
        assert result.variants_found == 0
        assert result.malformed_lines == 2

    def test_info_rs_preferred_over_id_column(self, make_vcf, vcf_record):
        text = make_vcf([vcf_record("chr10", 94842866, "rs1057910", "A", "C", "GENE=CYP2C9;RS=rs0001")])
        assert parse_vcf(text).gene_variants["CYP2C9"][0].rsid == "rs0001"

    def test_missing_id_marker_gives_empty_rsid(self, make_vcf, vcf_record):
        text = make_vcf([vcf_record("chr10", 94842866, ".", "A", "C", "GENE=CYP2C9;STAR=*3")])

        rec = parse_vcf(text).gene_variants["CYP2C9"][0]

        assert rec.rsid == ""
        assert rec.star == "*3"

    def test_missing_star_is_empty(self, make_vcf, vcf_record):
        text = make_vcf([vcf_record("chr12", 21178615, "rs4149056", "T", "C", "GENE=SLCO1B1")])
        assert parse_vcf(text).gene_variants["SLCO1B1"][0].star == ""

    def test_file_order_preserved_per_gene(self, make_vcf, vcf_record):
        text = make_vcf([
            vcf_record("chr6", 18130918, "rs1800460", "C", "T", "GENE=TPMT;STAR=*3B"),
            vcf_record("chr22", 42130692, "rs3892097", "G", "A", "GENE=CYP2D6;STAR=*4"),
            vcf_record("chr6", 18138997, "rs1142345", "A", "G", "GENE=TPMT;STAR=*3C"),
        ])

        result = parse_vcf(text)

        assert [r.rsid for r in result.gene_variants["TPMT"]] == ["rs1800460", "rs1142345"]
        assert result.variants_found == 3
        assert result.genes_covered == ["CYP2D6", "TPMT"]


class TestInfoField:

    def test_key_values_and_flags(self):
        info = _parse_info_field("GENE=CYP2D6;DB;STAR=*1/*4;;H2")
        assert info == {"GENE": "CYP2D6", "DB": True, "STAR": "*1/*4", "H2": True}

    def test_value_keeps_text_after_first_equals(self):
        assert _parse_info_field("NOTE=a=b")["NOTE"] == "a=b"

    def test_flag_gene_is_not_a_gene(self, make_vcf, vcf_record):
        text = make_vcf([vcf_record("chr22", 42130692, "rs3892097", "G", "A", "GENE;STAR=*4")])
        assert parse_vcf(text).variants_found == 0
