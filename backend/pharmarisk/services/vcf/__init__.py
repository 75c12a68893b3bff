from .parser import (
    TARGET_PHARMACOGENES,
    GeneVariantIndex,
    MissingHeaderError,
    VariantRecord,
    VcfParseError,
    VcfParseResult,
    parse_vcf,
)

__all__ = [
    "TARGET_PHARMACOGENES",
    "GeneVariantIndex",
    "MissingHeaderError",
    "VariantRecord",
    "VcfParseError",
    "VcfParseResult",
    "parse_vcf",
]
