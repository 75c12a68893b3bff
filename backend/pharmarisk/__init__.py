"""PharmaRisk: VCF genotype to metabolizer phenotype to drug-response risk."""

__version__ = "1.0.0"
