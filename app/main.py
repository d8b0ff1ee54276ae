"""
FastAPI application entry point.

Wires up the service layer, mounts static files,
and exposes the ``GET /api/quantum``, ``GET /api/analysis`` and
``POST /analyze`` endpoints.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import LOG_FORMAT, LOG_LEVEL
from app.schemas import (
    AnalysisResult,
    AnalyzeRequest,
    ErrorResponse,
    QuantumAnalysisResponse,
)
from app.services import distribution_engine, quantum_client

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

FETCH_FAILED = "Failed to fetch quantum simulation data"
INVALID_DATA = "Invalid quantum simulation data"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging once at startup."""
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    yield


app = FastAPI(
    title="Quantum Distribution Analyzer",
    version="1.0.0",
    lifespan=lifespan,
)

# -- CORS (allow all origins for local / dev usage) -------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- Static files ------------------------------------------------------------
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


# -- Helpers -----------------------------------------------------------------

def _error(status_code: int, error: str, details: str) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _run_pipeline(payload: dict[str, Any]) -> QuantumAnalysisResponse:
    probabilities = quantum_client.extract_probabilities(payload)
    analysis = distribution_engine.analyze(probabilities)
    logger.info(
        "Analysed %d states (entropy %.4f bits, %d significant)",
        analysis.total_states,
        analysis.entropy,
        analysis.significant_states,
    )
    return QuantumAnalysisResponse(data=payload, analysis=analysis)


# -- Routes ------------------------------------------------------------------

@app.get("/", include_in_schema=False)
async def root():
    """Serve the dashboard."""
    return FileResponse(str(STATIC_DIR / "index.html"))


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/api/quantum")
def quantum_data():
    """Proxy one simulation run; the upstream JSON is returned verbatim."""
    try:
        return quantum_client.fetch_quantum_data()
    except quantum_client.QuantumFetchError as e:
        return _error(500, FETCH_FAILED, str(e))


@app.get("/api/analysis", response_model=QuantumAnalysisResponse)
def quantum_analysis():
    """Fetch a simulation run and analyse its probability distribution."""
    try:
        payload = quantum_client.fetch_quantum_data()
    except quantum_client.QuantumFetchError as e:
        return _error(500, FETCH_FAILED, str(e))

    try:
        return _run_pipeline(payload)
    except distribution_engine.InvalidDistributionError as e:
        logger.warning("Upstream returned unusable distribution: %s", e)
        return _error(502, INVALID_DATA, str(e))


@app.post("/analyze", response_model=AnalysisResult)
async def analyze(payload: AnalyzeRequest):
    """Analyse a client-supplied probability distribution."""
    try:
        return distribution_engine.analyze(payload.probabilities)
    except distribution_engine.InvalidDistributionError as e:
        return _error(422, "Invalid distribution", str(e))
