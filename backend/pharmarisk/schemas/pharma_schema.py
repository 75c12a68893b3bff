from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List
from datetime import datetime

from pharmarisk.services.pharmacogenomics.models import (
    ClinicalRecommendation,
    DetectedVariant,
    PhenotypeCategory,
    RiskAssessment,
)


class PharmacogenomicProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary_gene: str
    diplotype: str
    phenotype: PhenotypeCategory
    detected_variants: List[DetectedVariant] = []


class LLMExplanation(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str = ""
    mechanism: str = ""
    evidence: str = ""
    citations: List[str] = []

    @property
    def is_empty(self) -> bool:
        return not (self.summary or self.mechanism or self.evidence or self.citations)


class QualityMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    vcf_parsing_success: bool = True
    variants_found: int = Field(0, ge=0, description="Target-gene variants accepted across the whole file")
    gene_variants_found: int = Field(0, ge=0, description="Variants detected for this result's gene")
    genes_covered: List[str] = Field(default_factory=list, description="Genes with at least one variant")


class AnalysisResult(BaseModel):
    """One (patient, drug) result. Only the explanation is filled in after assembly."""
    model_config = ConfigDict(frozen=True)

    patient_id: str
    drug: str
    timestamp: str
    risk_assessment: RiskAssessment
    pharmacogenomic_profile: PharmacogenomicProfile
    clinical_recommendation: ClinicalRecommendation
    llm_generated_explanation: LLMExplanation = Field(default_factory=LLMExplanation)
    quality_metrics: QualityMetrics

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v):
        try:
            datetime.fromisoformat(v.replace('Z', '+00:00'))
            return v
        except ValueError:
            raise ValueError("Timestamp must be a valid ISO 8601 string")
