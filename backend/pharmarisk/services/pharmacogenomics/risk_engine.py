"""
Risk Engine - Drug risk assessment from metabolizer phenotype.

The (drug, phenotype) -> (risk label, severity) mapping is a static table.
Confidence depends only on whether any variant was detected for the gene.
"""

import logging
from typing import Dict, Optional, Sequence, Tuple

from .config import get_confidence_config
from .models import PhenotypeCategory, RiskAssessment, RiskLabel, Severity

logger = logging.getLogger(__name__)

PM = PhenotypeCategory.PM
IM = PhenotypeCategory.IM
NM = PhenotypeCategory.NM
RM = PhenotypeCategory.RM
URM = PhenotypeCategory.URM

RiskRow = Dict[PhenotypeCategory, Tuple[RiskLabel, Severity]]

RISK_TABLE: Dict[str, RiskRow] = {
    "CODEINE": {
        PM:  (RiskLabel.INEFFECTIVE, Severity.MODERATE),
        IM:  (RiskLabel.ADJUST_DOSAGE, Severity.LOW),
        NM:  (RiskLabel.SAFE, Severity.NONE),
        URM: (RiskLabel.TOXIC, Severity.HIGH),
    },
    "CLOPIDOGREL": {
        PM: (RiskLabel.INEFFECTIVE, Severity.HIGH),
        IM: (RiskLabel.ADJUST_DOSAGE, Severity.MODERATE),
        NM: (RiskLabel.SAFE, Severity.NONE),
        RM: (RiskLabel.SAFE, Severity.NONE),
    },
    "WARFARIN": {
        PM: (RiskLabel.TOXIC, Severity.HIGH),
        IM: (RiskLabel.ADJUST_DOSAGE, Severity.MODERATE),
        NM: (RiskLabel.SAFE, Severity.NONE),
    },
    "SIMVASTATIN": {
        PM: (RiskLabel.TOXIC, Severity.HIGH),
        IM: (RiskLabel.ADJUST_DOSAGE, Severity.MODERATE),
        NM: (RiskLabel.SAFE, Severity.NONE),
    },
    "AZATHIOPRINE": {
        PM: (RiskLabel.TOXIC, Severity.CRITICAL),
        IM: (RiskLabel.ADJUST_DOSAGE, Severity.MODERATE),
        NM: (RiskLabel.SAFE, Severity.NONE),
    },
    "FLUOROURACIL": {
        PM: (RiskLabel.TOXIC, Severity.CRITICAL),
        IM: (RiskLabel.ADJUST_DOSAGE, Severity.HIGH),
        NM: (RiskLabel.SAFE, Severity.NONE),
    },
}

UNKNOWN_RISK: Tuple[RiskLabel, Severity] = (RiskLabel.UNKNOWN, Severity.NONE)


class RiskEngine:
    """Looks up drug risk for a phenotype and scores confidence."""

    def __init__(self, risk_table: Optional[Dict[str, RiskRow]] = None):
        self.risk_table = risk_table if risk_table is not None else RISK_TABLE

    def evaluate_risk(
        self,
        drug: str,
        gene: str,
        phenotype: PhenotypeCategory,
        detected_variants: Sequence = (),
    ) -> RiskAssessment:
        """
        Evaluate risk for a drug given the patient's phenotype.

        Args:
            drug: Upper-case drug code (e.g., CODEINE)
            gene: Gene driving the assessment; informational only
            phenotype: Phenotype category for that gene
            detected_variants: Variants detected for the gene

        Returns:
            RiskAssessment
        """
        label, severity = self.risk_table.get(drug, {}).get(phenotype, UNKNOWN_RISK)
        confidence = self.confidence_for(detected_variants)

        logger.debug(
            "Risk for %s (%s, %s): %s/%s confidence=%.2f",
            drug, gene, getattr(phenotype, "value", phenotype), label.value, severity.value, confidence,
        )
        return RiskAssessment(risk_label=label, severity=severity, confidence_score=confidence)

    @staticmethod
    def confidence_for(detected_variants: Sequence) -> float:
        conf = get_confidence_config()
        if len(detected_variants) > 0:
            return conf.detected_variant_confidence
        return conf.base_confidence


def create_risk_engine() -> RiskEngine:
    """Factory function to create a RiskEngine instance."""
    return RiskEngine()
