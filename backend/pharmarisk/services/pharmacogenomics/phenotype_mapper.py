"""
Phenotype Mapper - Diplotype resolution and phenotype determination.

Phenotypes come from a declarative per-gene rule table evaluated
first-match-wins over the star allele tokens found in the VCF. All
mapping is deterministic; no activity scores, no learned priors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple
import logging

from .config import get_config
from .models import DetectedVariant, DiplotypeResult, PhenotypeCategory
from .star_alleles import allele_key, diplotype_from_star, split_star_tokens

if TYPE_CHECKING:
    from pharmarisk.services.vcf.parser import VariantRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhenotypeRule:
    """
    One row of a gene rule table.

    ``alleles=None`` matches any detected allele. Otherwise at least one
    detected key must be in ``alleles`` and at least ``min_distinct``
    distinct keys must have been detected.
    """
    phenotype: PhenotypeCategory
    alleles: Optional[FrozenSet[str]] = None
    min_distinct: int = 1

    def matches(self, keys: FrozenSet[str]) -> bool:
        if len(keys) < self.min_distinct:
            return False
        if self.alleles is None:
            return True
        return not self.alleles.isdisjoint(keys)


def _rule(phenotype: PhenotypeCategory, alleles: Optional[Iterable[str]] = None, min_distinct: int = 1) -> PhenotypeRule:
    keyed = frozenset(allele_key(a) for a in alleles) if alleles is not None else None
    return PhenotypeRule(phenotype=phenotype, alleles=keyed, min_distinct=min_distinct)


def _loss_of_function_rules(alleles: Sequence[str]) -> Tuple[PhenotypeRule, ...]:
    # Two or more distinct alleles with a hit reads as biallelic -> PM; a lone hit -> IM.
    return (
        _rule(PhenotypeCategory.PM, alleles, min_distinct=2),
        _rule(PhenotypeCategory.IM, alleles),
        _rule(PhenotypeCategory.NM),
    )


PHENOTYPE_RULES: Dict[str, Tuple[PhenotypeRule, ...]] = {
    "CYP2D6": (
        _rule(PhenotypeCategory.PM, ["*3", "*4", "*5", "*6"]),
        _rule(PhenotypeCategory.IM, ["*10", "*41"]),
        _rule(PhenotypeCategory.URM, ["*1xN", "*2xN", "*dup"]),
        _rule(PhenotypeCategory.NM),
    ),
    "CYP2C19": (
        _rule(PhenotypeCategory.PM, ["*2", "*3"]),
        _rule(PhenotypeCategory.RM, ["*17"]),
        _rule(PhenotypeCategory.NM),
    ),
    "CYP2C9": _loss_of_function_rules(["*2", "*3"]),
    "SLCO1B1": _loss_of_function_rules(["*5", "*15"]),
    "TPMT": _loss_of_function_rules(["*2", "*3A", "*3C"]),
    "DPYD": _loss_of_function_rules(["*2A", "*13", "*9A"]),
}


class PhenotypeMapper:
    """Maps a gene and its detected star alleles to a phenotype category."""

    def __init__(self, rules: Optional[Dict[str, Tuple[PhenotypeRule, ...]]] = None):
        self.rules = rules if rules is not None else PHENOTYPE_RULES

    def classify(self, gene: str, alleles: Iterable[str]) -> PhenotypeCategory:
        keys = frozenset(allele_key(a) for a in alleles)
        for rule in self.rules.get(gene, ()):
            if rule.matches(keys):
                return rule.phenotype
        return PhenotypeCategory.UNKNOWN


class DiplotypeResolver:
    """Resolves the displayed diplotype, detected variants and phenotype for a gene."""

    def __init__(self, mapper: Optional[PhenotypeMapper] = None):
        self.mapper = mapper or PhenotypeMapper()

    def resolve(self, gene: str, variants: Sequence["VariantRecord"]) -> DiplotypeResult:
        diplotype = get_config().default_diplotype
        detected: List[DetectedVariant] = []
        alleles: List[str] = []

        for v in variants:
            detected.append(
                DetectedVariant(
                    rsid=v.rsid,
                    gene=v.gene,
                    star=v.star,
                    chrom=v.chrom,
                    pos=v.pos,
                    ref=v.ref,
                    alt=v.alt,
                )
            )
            if not v.star:
                continue
            alleles.extend(split_star_tokens(v.star))
            # Later '/'-joined annotations overwrite earlier ones.
            called = diplotype_from_star(v.star)
            if called is not None:
                diplotype = called

        phenotype = self.mapper.classify(gene, alleles)
        logger.debug("%s: diplotype=%s alleles=%s phenotype=%s", gene, diplotype, alleles, phenotype.value)

        return DiplotypeResult(
            gene=gene,
            diplotype=diplotype,
            phenotype=phenotype,
            detected_variants=detected,
            alleles=alleles,
        )
