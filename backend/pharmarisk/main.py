import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pharmarisk.api.router import api_router
from pharmarisk.services.pipeline.analysis_pipeline import SUPPORTED_DRUGS
from pharmarisk.services.vcf.parser import TARGET_PHARMACOGENES

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title="PharmaRisk API",
    description="Genotype to phenotype to drug-risk analysis of patient VCF files",
    version="1.0.0"
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "service": "PharmaRisk",
        "supported_drugs": SUPPORTED_DRUGS,
        "supported_genes": list(TARGET_PHARMACOGENES),
    }
