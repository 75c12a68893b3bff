"""
Analysis Pipeline - Orchestrates VCF -> phenotype -> risk -> explanation.

``analyze`` is synchronous and pure apart from the timestamp: it parses the
VCF once and builds one AnalysisResult per requested drug, with the
explanation left empty. ``run_analysis`` adds the narrative step.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from pharmarisk.schemas.pharma_schema import (
    AnalysisResult,
    PharmacogenomicProfile,
    QualityMetrics,
)
from pharmarisk.services.llm.explanation_service import attach_explanation
from pharmarisk.services.pharmacogenomics.phenotype_mapper import DiplotypeResolver
from pharmarisk.services.pharmacogenomics.recommendation_engine import RecommendationEngine
from pharmarisk.services.pharmacogenomics.risk_engine import RiskEngine
from pharmarisk.services.vcf.parser import MissingHeaderError, VcfParseResult, parse_vcf

logger = logging.getLogger(__name__)

# ── Drug-to-gene mapping ──────────────────────────────────────────────────
DRUG_GENE_MAP = {
    "CODEINE":      "CYP2D6",
    "WARFARIN":     "CYP2C9",
    "CLOPIDOGREL":  "CYP2C19",
    "SIMVASTATIN":  "SLCO1B1",
    "AZATHIOPRINE": "TPMT",
    "FLUOROURACIL": "DPYD",
}

SUPPORTED_DRUGS = list(DRUG_GENE_MAP)

UNKNOWN_GENE = "UNKNOWN"


def drug_to_gene(drug: str) -> str:
    return DRUG_GENE_MAP.get(drug, UNKNOWN_GENE)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_result(
    parsed: VcfParseResult,
    drug: str,
    *,
    resolver: Optional[DiplotypeResolver] = None,
    risk_engine: Optional[RiskEngine] = None,
    recommender: Optional[RecommendationEngine] = None,
) -> AnalysisResult:
    """
    Run diplotype → phenotype → risk → recommendation for one drug.

    Raises:
        MissingHeaderError: ``parsed`` is a failed parse.
    """
    if not parsed.success:
        raise MissingHeaderError(parsed.error_reason)

    resolver = resolver or DiplotypeResolver()
    risk_engine = risk_engine or RiskEngine()
    recommender = recommender or RecommendationEngine()

    gene = drug_to_gene(drug)
    gene_variants = parsed.gene_variants.get(gene, [])

    diplo = resolver.resolve(gene, gene_variants)
    risk = risk_engine.evaluate_risk(drug, gene, diplo.phenotype, diplo.detected_variants)
    recommendation = recommender.build(drug, gene, diplo.phenotype, risk)

    return AnalysisResult(
        patient_id=parsed.patient_id,
        drug=drug,
        timestamp=_now_iso(),
        risk_assessment=risk,
        pharmacogenomic_profile=PharmacogenomicProfile(
            primary_gene=gene,
            diplotype=diplo.diplotype,
            phenotype=diplo.phenotype,
            detected_variants=diplo.detected_variants,
        ),
        clinical_recommendation=recommendation,
        quality_metrics=QualityMetrics(
            vcf_parsing_success=parsed.success,
            variants_found=parsed.variants_found,
            gene_variants_found=len(diplo.detected_variants),
            genes_covered=parsed.genes_covered,
        ),
    )


def analyze(vcf_text, drug_codes: Iterable[str]) -> List[AnalysisResult]:
    """
    Parse ``vcf_text`` once and produce one result per drug, in request order.

    Raises:
        MissingHeaderError: the VCF has no #CHROM header line.
    """
    parsed = parse_vcf(vcf_text)
    if not parsed.success:
        raise MissingHeaderError(parsed.error_reason)

    resolver = DiplotypeResolver()
    risk_engine = RiskEngine()
    recommender = RecommendationEngine()

    results = []
    for drug in drug_codes:
        result = build_result(
            parsed, drug, resolver=resolver, risk_engine=risk_engine, recommender=recommender
        )
        logger.info(
            "%s → %s %s %s: %s/%s",
            drug,
            result.pharmacogenomic_profile.primary_gene,
            result.pharmacogenomic_profile.diplotype,
            result.pharmacogenomic_profile.phenotype.value,
            result.risk_assessment.risk_label.value,
            result.risk_assessment.severity.value,
        )
        results.append(result)
    return results


async def run_analysis(vcf_text, drug_codes: Iterable[str], client=None) -> List[AnalysisResult]:
    """Full pipeline: analyze, then attach explanations concurrently, preserving order."""
    results = analyze(vcf_text, drug_codes)
    logger.info("Generating explanations for %d result(s)", len(results))
    return list(await asyncio.gather(*(attach_explanation(r, client=client) for r in results)))
