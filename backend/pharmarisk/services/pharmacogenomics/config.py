"""
Configuration for pharmacogenomics service.
Centralizes tunable parameters for diplotype display and confidence scoring.
"""

from pydantic import BaseModel, Field


class ConfidenceConfig(BaseModel):
    """Confidence values attached to every risk assessment."""

    base_confidence: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="Confidence when no variant was detected for the drug's gene"
    )

    detected_variant_confidence: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Confidence when at least one variant was detected for the gene"
    )


class PharmacogenomicsConfig(BaseModel):
    """Main configuration for pharmacogenomics service."""

    confidence: ConfidenceConfig = Field(
        default_factory=ConfidenceConfig,
        description="Confidence scoring configuration"
    )

    default_patient_id: str = Field(
        default="PATIENT_XXX",
        description="Patient identifier used when the #CHROM header has no sample column"
    )

    default_diplotype: str = Field(
        default="*X/*Y",
        description="Diplotype shown when no variant carries a '/'-joined star annotation"
    )

    guideline_source: str = Field(
        default="CPIC guidelines",
        description="Guideline tag attached to every clinical recommendation"
    )


# Global configuration instance
_config: PharmacogenomicsConfig = PharmacogenomicsConfig()


def get_config() -> PharmacogenomicsConfig:
    """Get the global configuration instance."""
    return _config


def update_config(**kwargs):
    """Update configuration parameters."""
    global _config
    current_dict = _config.model_dump()

    for key, value in kwargs.items():
        if '.' in key:
            # Nested keys like 'confidence.base_confidence'
            parts = key.split('.')
            current = current_dict
            for part in parts[:-1]:
                current = current[part]
            current[parts[-1]] = value
        else:
            current_dict[key] = value

    _config = PharmacogenomicsConfig(**current_dict)
    return _config


def reset_config():
    """Restore the default configuration."""
    global _config
    _config = PharmacogenomicsConfig()
    return _config


def load_config_from_file(filepath: str):
    """Load configuration from a JSON file."""
    import json
    global _config

    with open(filepath, 'r') as f:
        config_dict = json.load(f)

    _config = PharmacogenomicsConfig(**config_dict)
    return _config


def get_confidence_config() -> ConfidenceConfig:
    """Get confidence scoring configuration."""
    return _config.confidence
