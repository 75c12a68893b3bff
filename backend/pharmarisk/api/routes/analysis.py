from fastapi import APIRouter, UploadFile, File, Form, HTTPException, status
from typing import List, Optional
import logging

from pharmarisk.schemas.pharma_schema import AnalysisResult
from pharmarisk.services.pipeline.analysis_pipeline import SUPPORTED_DRUGS, run_analysis
from pharmarisk.services.vcf.parser import VcfParseError

router = APIRouter()
logger = logging.getLogger(__name__)


def parse_drug_list(drugs: str) -> List[str]:
    return [d.strip().upper() for d in drugs.split(",") if d.strip()]


@router.post(
    "/analyze",
    response_model=List[AnalysisResult],
    status_code=status.HTTP_200_OK,
    summary="Analyze Pharmacogenomic Risk",
    description="Upload a VCF file and a comma-separated list of drugs to receive one risk assessment per drug."
)
async def analyze_pharmacogenomics(
    vcf: Optional[UploadFile] = File(None, description="Patient's VCF file containing genetic variants"),
    drugs: str = Form("", description="Comma-separated drug names (e.g., CODEINE,WARFARIN)"),
) -> List[AnalysisResult]:
    """
    Endpoint to trigger the pharmacogenomic analysis pipeline.

    - **vcf**: Genetic data file
    - **drugs**: Target drug names
    """
    content = await vcf.read() if vcf is not None else b""
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="VCF file is required.")

    requested = parse_drug_list(drugs)
    if not requested:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Drug name is required.")

    invalid = [d for d in requested if d not in SUPPORTED_DRUGS]
    if invalid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported drug(s): {', '.join(invalid)}."
        )

    try:
        return await run_analysis(content, requested)
    except VcfParseError as e:
        logger.warning("Rejected VCF upload: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected error in analysis pipeline: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unexpected server error."
        )
