from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from pharmarisk.services.pharmacogenomics.config import get_config

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Constants & Configuration
# ----------------------------------------------------------------------

# Index order of GeneVariantIndex and of genes_covered in quality metrics.
TARGET_PHARMACOGENES: Tuple[str, ...] = (
    "CYP2D6",
    "CYP2C19",
    "CYP2C9",
    "SLCO1B1",
    "TPMT",
    "DPYD",
)

MISSING_HEADER_REASON = "Invalid VCF: missing #CHROM header."

# CHROM, POS, ID, REF, ALT, QUAL, FILTER, INFO
MIN_DATA_COLUMNS = 8


@dataclass(frozen=True)
class VariantRecord:
    rsid: str
    gene: str
    star: str
    chrom: str
    pos: str
    ref: str
    alt: str


GeneVariantIndex = Dict[str, List[VariantRecord]]


@dataclass
class VcfParseResult:
    success: bool
    patient_id: Optional[str] = None
    gene_variants: GeneVariantIndex = field(default_factory=dict)
    variants_found: int = 0
    error_reason: Optional[str] = None
    malformed_lines: int = 0
    off_target_records: int = 0

    @property
    def genes_covered(self) -> List[str]:
        """Genes with at least one accepted record, in index order."""
        return [gene for gene, records in self.gene_variants.items() if records]


class VcfParseError(ValueError):
    pass


class MissingHeaderError(VcfParseError):
    """No #CHROM column header line was found in the VCF text."""


def empty_gene_index() -> GeneVariantIndex:
    return {gene: [] for gene in TARGET_PHARMACOGENES}


def parse_vcf(content: Union[str, bytes]) -> VcfParseResult:
    """
    Parse VCF text into a per-gene index of pharmacogenomic records for
    the 6 target genes: CYP2D6, CYP2C19, CYP2C9, SLCO1B1, TPMT, DPYD.

    Only a missing #CHROM header fails the parse. Short lines and records
    for other genes are skipped and counted.
    """
    gene_variants = empty_gene_index()
    header_columns: Optional[List[str]] = None
    variants_found = 0
    malformed = 0
    off_target = 0

    for line in _normalize_to_lines(content):
        if line.startswith("##"):
            continue
        if line.startswith("#CHROM"):
            if header_columns is None:
                header_columns = _split_header(line)
            continue
        if line.startswith("#"):
            continue

        record = _parse_variant_line(line)
        if record is None:
            malformed += 1
            continue
        if record.gene not in gene_variants:
            off_target += 1
            continue

        gene_variants[record.gene].append(record)
        variants_found += 1

    if header_columns is None:
        logger.warning("VCF rejected: %s", MISSING_HEADER_REASON)
        return VcfParseResult(success=False, error_reason=MISSING_HEADER_REASON)

    if malformed or off_target:
        logger.debug(
            "Skipped %d malformed line(s) and %d off-target record(s)", malformed, off_target
        )

    result = VcfParseResult(
        success=True,
        patient_id=_patient_id_from_header(header_columns),
        gene_variants=gene_variants,
        variants_found=variants_found,
        malformed_lines=malformed,
        off_target_records=off_target,
    )
    logger.info(
        "Parsed VCF for %s: %d pharmacogenomic variant(s) across %s",
        result.patient_id,
        variants_found,
        result.genes_covered or "no target genes",
    )
    return result


_LINE_BREAK = re.compile(r"\r?\n")


def _normalize_to_lines(content: Union[str, bytes]) -> Iterator[str]:
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    for line in _LINE_BREAK.split(content):
        if line:
            yield line


def _split_header(line: str) -> List[str]:
    if "\t" in line:
        return line.split("\t")
    return line.split()


def _patient_id_from_header(columns: List[str]) -> str:
    if len(columns) >= 10 and columns[9].strip():
        return columns[9].strip()
    return get_config().default_patient_id


def _parse_info_field(info: str) -> Dict[str, Union[str, bool]]:
    out: Dict[str, Union[str, bool]] = {}
    for item in info.split(";"):
        if not item:
            continue
        if "=" not in item:
            out[item] = True
            continue
        k, v = item.split("=", 1)
        out[k] = v
    return out


def _info_str(info: Dict[str, Union[str, bool]], key: str) -> str:
    value = info.get(key)
    return value.strip() if isinstance(value, str) else ""


def _parse_variant_line(line: str) -> Optional[VariantRecord]:
    """Return None for malformed lines; gene is upper-cased but not yet filtered."""
    cols = line.split("\t")
    if len(cols) < MIN_DATA_COLUMNS:
        return None

    chrom, pos, vid, ref, alt, _qual, _flt, info_s = cols[:MIN_DATA_COLUMNS]
    info = _parse_info_field(info_s)

    gene = _info_str(info, "GENE").upper()

    rsid = _info_str(info, "RS")
    if not rsid and vid.strip() not in ("", "."):
        rsid = vid.strip()

    return VariantRecord(
        rsid=rsid,
        gene=gene,
        star=_info_str(info, "STAR"),
        chrom=chrom,
        pos=pos,
        ref=ref,
        alt=alt,
    )
