"""
Star allele normalization.

VCF STAR annotations arrive in several shapes (``*4``, ``*1/*4``,
``CYP2D6*4/*4``, ``*2, *3``). These helpers turn them into tokens and
comparison keys.
"""

import re
from typing import List, Optional

_GENE_PREFIX = re.compile(r"^\w+")
_TOKEN_SEPARATORS = re.compile(r"[,/\s]+")
_NON_KEY_CHARS = re.compile(r"[^*0-9xn]", re.IGNORECASE)


def strip_gene_prefix(raw: str) -> str:
    """Drop a leading run of word characters, e.g. a gene name glued to the allele."""
    return _GENE_PREFIX.sub("", raw)


def split_star_tokens(raw: str) -> List[str]:
    """``"*1/*4"`` -> ``["*1", "*4"]``; empty fragments are dropped."""
    if not raw:
        return []
    return [t for t in _TOKEN_SEPARATORS.split(strip_gene_prefix(raw)) if t]


def diplotype_from_star(raw: str) -> Optional[str]:
    """Displayable diplotype for a '/'-joined annotation, otherwise None."""
    if raw and "/" in raw:
        return strip_gene_prefix(raw)
    return None


def allele_key(token: str) -> str:
    """
    Comparison key for an allele token.

    Keeps only ``*``, digits, ``x`` and ``N`` and upper-cases the rest, so
    ``*1xN``, ``*1XN`` and ``*1 xN.`` compare equal. Letter suffixes are
    dropped too, so ``*3A`` keys as ``*3``.
    """
    return _NON_KEY_CHARS.sub("", token).upper()
