import logging
from typing import List

from pharmarisk.schemas.pharma_schema import AnalysisResult, LLMExplanation
from pharmarisk.services.llm.gemini_client import ExplanationUnavailable, GeminiClient

logger = logging.getLogger(__name__)

LOCAL_SUMMARY = "Genotype-driven risk assessment generated using pharmacogenomic heuristics."
LOCAL_MECHANISM = (
    "Variant alleles in drug metabolism genes may alter enzyme activity, "
    "leading to changes in drug exposure."
)
LOCAL_EVIDENCE = (
    "Explanation generated without external LLM calls. "
    "Provide GEMINI_API_KEY for enriched narrative."
)

LLM_MECHANISM = "Variant alleles may alter enzyme function and drug activation or clearance."
LLM_EVIDENCE = "Generated with Gemini API."
EMPTY_SUMMARY = "No explanation returned."

ERROR_SUMMARY = "LLM explanation unavailable due to an API error. Showing fallback summary."
ERROR_MECHANISM = "Variant alleles in drug metabolism genes may alter enzyme activity."
ERROR_EVIDENCE = "Gemini API call failed."


def citations_for(result: AnalysisResult) -> List[str]:
    """rsIDs of the detected variants, skipping records without one."""
    return [v.rsid for v in result.pharmacogenomic_profile.detected_variants if v.rsid]


def build_prompt(result: AnalysisResult) -> str:
    """Prompt carrying the full result as JSON context."""
    return (
        "Generate a concise clinical explanation for this pharmacogenomic result. "
        "Cite variants by rsID when available. Mention gene, phenotype, and drug. "
        "Use plain language and keep to 4-6 sentences.\n\n"
        + result.model_dump_json(indent=2)
    )


def local_explanation(result: AnalysisResult) -> LLMExplanation:
    return LLMExplanation(
        summary=LOCAL_SUMMARY,
        mechanism=LOCAL_MECHANISM,
        evidence=LOCAL_EVIDENCE,
        citations=citations_for(result),
    )


def unavailable_explanation(result: AnalysisResult) -> LLMExplanation:
    return LLMExplanation(
        summary=ERROR_SUMMARY,
        mechanism=ERROR_MECHANISM,
        evidence=ERROR_EVIDENCE,
        citations=citations_for(result),
    )


async def generate_explanation(result: AnalysisResult, client) -> LLMExplanation:
    """
    Narrative for one result. Never raises: a missing API key gives the
    local heuristic text, a failed call gives the API-error fallback.
    """
    if not client.is_configured:
        logger.info("No LLM configured, using local explanation for %s", result.drug)
        return local_explanation(result)

    try:
        text = await client.generate_text(build_prompt(result))
        return LLMExplanation(
            summary=text.strip() or EMPTY_SUMMARY,
            mechanism=LLM_MECHANISM,
            evidence=LLM_EVIDENCE,
            citations=citations_for(result),
        )
    except ExplanationUnavailable as e:
        logger.warning("LLM fallback triggered for %s: %s", result.drug, e)
        return unavailable_explanation(result)
    except Exception:
        logger.exception("Unexpected error in explanation service for %s", result.drug)
        return unavailable_explanation(result)


async def attach_explanation(result: AnalysisResult, client=None) -> AnalysisResult:
    """
    Return a copy of ``result`` with its explanation filled in.

    Raises:
        ValueError: the result already carries an explanation.
    """
    if not result.llm_generated_explanation.is_empty:
        raise ValueError(f"Explanation already attached for {result.drug}")

    explanation = await generate_explanation(result, client or GeminiClient())
    return result.model_copy(update={"llm_generated_explanation": explanation})
