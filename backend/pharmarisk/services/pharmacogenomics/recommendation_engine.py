"""
Recommendation Engine - Map risk labels to clinical recommendations.

Features:
- Fixed recommendation text per risk label
- Static guideline tag
- Drug-specific alternatives for actionable labels
"""

from typing import Dict, List, Optional

from .config import get_config
from .models import ClinicalRecommendation, PhenotypeCategory, RiskAssessment, RiskLabel


# ============================================================================
# Recommendation Text
# ============================================================================

STANDARD_DOSING = "Use standard dosing."

RECOMMENDATION_TEXT: Dict[RiskLabel, str] = {
    RiskLabel.ADJUST_DOSAGE: "Consider dose adjustment or an alternative agent based on phenotype.",
    RiskLabel.TOXIC: "Avoid this drug or use a substantially reduced dose.",
    RiskLabel.INEFFECTIVE: "Consider alternative therapy due to reduced efficacy.",
}


# ============================================================================
# Drug-Specific Alternative Mappings
# ============================================================================

DRUG_ALTERNATIVES: Dict[str, List[str]] = {
    "CLOPIDOGREL": ["Prasugrel", "Ticagrelor"],
    "CODEINE": ["Morphine", "Hydromorphone", "Non-opioid analgesics"],
    "AZATHIOPRINE": ["Mycophenolate mofetil", "Methotrexate"],
    "FLUOROURACIL": ["Raltitrexed"],
    "WARFARIN": ["Apixaban", "Rivaroxaban", "Dabigatran"],
    "SIMVASTATIN": ["Pravastatin", "Rosuvastatin"],
}


def recommendation_for(label: RiskLabel) -> str:
    """Recommendation text for a risk label; anything not actionable gets standard dosing."""
    return RECOMMENDATION_TEXT.get(label, STANDARD_DOSING)


class RecommendationEngine:
    """Builds the clinical recommendation attached to each analysis result."""

    def __init__(self, drug_alternatives: Optional[Dict[str, List[str]]] = None):
        self.drug_alternatives = drug_alternatives or DRUG_ALTERNATIVES

    def build(
        self,
        drug: str,
        gene: str,
        phenotype: PhenotypeCategory,
        risk: RiskAssessment,
    ) -> ClinicalRecommendation:
        label = RiskLabel(risk.risk_label)
        alternatives: List[str] = []
        if label in RECOMMENDATION_TEXT:
            alternatives = list(self.drug_alternatives.get(drug, []))

        return ClinicalRecommendation(
            primary_gene=gene,
            phenotype=phenotype,
            recommendation=recommendation_for(label),
            guideline=get_config().guideline_source,
            alternatives=alternatives,
        )
