"""Shared fixtures: VCF text builders and configuration reset."""

import pytest

from pharmarisk.services.pharmacogenomics.config import reset_config

META_LINES = [
    "##fileformat=VCFv4.2",
    '##INFO=<ID=GENE,Number=1,Type=String,Description="Gene symbol">',
    '##INFO=<ID=STAR,Number=1,Type=String,Description="Star allele">',
    '##INFO=<ID=RS,Number=1,Type=String,Description="dbSNP ID">',
]
HEADER_COLUMNS = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT"]


def record(chrom, pos, rsid, ref, alt, info, gt="0/1"):
    return "\t".join([chrom, str(pos), rsid, ref, alt, "99", "PASS", info, "GT", gt])


@pytest.fixture
def make_vcf():
    """Build VCF text from data lines; ``sample=None`` drops the sample column."""

    def _make(lines=(), sample="PATIENT_001", header=True):
        out = list(META_LINES)
        if header:
            cols = HEADER_COLUMNS + ([sample] if sample else [])
            out.append("\t".join(cols))
        out.extend(lines)
        return "\n".join(out) + "\n"

    return _make


@pytest.fixture
def vcf_record():
    return record


@pytest.fixture(autouse=True)
def default_config():
    reset_config()
    yield
    reset_config()
