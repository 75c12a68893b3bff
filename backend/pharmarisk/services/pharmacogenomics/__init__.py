"""
Pharmacogenomics Service

Rule-based pharmacogenomic decision engine for drug risk assessment.
Provides deterministic star allele normalization, phenotype classification,
risk lookup and clinical recommendations.
"""

from .models import (
    PhenotypeCategory,
    RiskLabel,
    Severity,
    DetectedVariant,
    DiplotypeResult,
    RiskAssessment,
    ClinicalRecommendation,
)
from .star_alleles import allele_key, diplotype_from_star, split_star_tokens, strip_gene_prefix
from .phenotype_mapper import DiplotypeResolver, PhenotypeMapper, PHENOTYPE_RULES
from .risk_engine import RiskEngine, create_risk_engine, RISK_TABLE
from .recommendation_engine import RecommendationEngine
from .config import (
    get_config,
    update_config,
    reset_config,
    load_config_from_file,
)

__all__ = [
    # Models
    'PhenotypeCategory',
    'RiskLabel',
    'Severity',
    'DetectedVariant',
    'DiplotypeResult',
    'RiskAssessment',
    'ClinicalRecommendation',

    # Star alleles
    'allele_key',
    'diplotype_from_star',
    'split_star_tokens',
    'strip_gene_prefix',

    # Phenotype Mapping
    'DiplotypeResolver',
    'PhenotypeMapper',
    'PHENOTYPE_RULES',

    # Risk Engine
    'RiskEngine',
    'create_risk_engine',
    'RISK_TABLE',
    'RecommendationEngine',

    # Config
    'get_config',
    'update_config',
    'reset_config',
    'load_config_from_file',
]
