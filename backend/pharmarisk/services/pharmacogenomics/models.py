"""
Internal data models for pharmacogenomics service.
These models represent the intermediate data structures produced while
resolving diplotypes, phenotypes and drug risk from parsed VCF records.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List
from enum import Enum


class PhenotypeCategory(str, Enum):
    """Coarse metabolizer category. Membership is decided per gene."""
    PM = "PM"
    IM = "IM"
    NM = "NM"
    RM = "RM"
    URM = "URM"
    UNKNOWN = "Unknown"


class RiskLabel(str, Enum):
    SAFE = "Safe"
    ADJUST_DOSAGE = "Adjust Dosage"
    TOXIC = "Toxic"
    INEFFECTIVE = "Ineffective"
    UNKNOWN = "Unknown"


class Severity(str, Enum):
    NONE = "none"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class DetectedVariant(BaseModel):
    """A variant reported in the pharmacogenomic profile, star annotation as found in the VCF."""
    model_config = ConfigDict(frozen=True)

    rsid: str = Field("", description="dbSNP reference ID (INFO RS or ID column)")
    gene: str = Field(..., description="Gene symbol")
    star: str = Field("", description="Raw star allele annotation from VCF INFO")
    chrom: str = Field(..., description="Chromosome identifier")
    pos: str = Field(..., description="Position on chromosome")
    ref: str = Field(..., description="Reference allele")
    alt: str = Field(..., description="Alternate allele")


class DiplotypeResult(BaseModel):
    """Result of diplotype resolution for a gene."""
    model_config = ConfigDict(frozen=True)

    gene: str = Field(..., description="Gene symbol")
    diplotype: str = Field(..., description="Diplotype (e.g., *1/*2)")
    phenotype: PhenotypeCategory = Field(
        PhenotypeCategory.UNKNOWN, description="Phenotype (e.g., IM, NM, PM)"
    )
    detected_variants: List[DetectedVariant] = Field(
        default_factory=list, description="Variants detected for the gene, in file order"
    )
    alleles: List[str] = Field(
        default_factory=list, description="Normalized star allele tokens, duplicates preserved"
    )


class RiskAssessment(BaseModel):
    """Risk assessment result for a drug-gene interaction."""
    model_config = ConfigDict(frozen=True)

    risk_label: RiskLabel = Field(RiskLabel.UNKNOWN, description="Risk classification label")
    confidence_score: float = Field(..., ge=0.0, le=1.0, description="Confidence score (0-1)")
    severity: Severity = Field(Severity.NONE, description="Severity: none, low, moderate, high, critical")


class ClinicalRecommendation(BaseModel):
    """Clinical recommendation based on pharmacogenomic data."""
    model_config = ConfigDict(frozen=True)

    primary_gene: str = Field(..., description="Gene driving the recommendation")
    phenotype: PhenotypeCategory = Field(..., description="Phenotype the recommendation applies to")
    recommendation: str = Field(..., description="Recommendation text")
    guideline: str = Field(..., description="Guideline source tag")
    alternatives: List[str] = Field(default_factory=list, description="Alternative agents to consider")
