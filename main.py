"""
Human Typed Input Local Service

FastAPI application exposing the analysis core to non-Python clients on
the same host:
- GET /health → service status
- POST /analyze → metrics + confidence JSON
- POST /export → typing proof JSON (deterministic bytes)

Stateless: every request carries its own event log snapshot.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, status
from fastapi.responses import Response

# Load .env before settings are read
load_dotenv()

from humantyped import __version__
from humantyped.analyzer import HumanTypedAnalyzer
from humantyped.config import get_settings
from humantyped.schemas.inputs import EventLog, ExportRequest
from humantyped.schemas.outputs import AnalyzeResponse, EncodingFailed, HealthResponse


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Application State
# =============================================================================

class AppState:
    """Application state container."""
    analyzer: Optional[HumanTypedAnalyzer] = None


state = AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting Human Typed Input service...")
    state.analyzer = HumanTypedAnalyzer()
    logger.info(f"Analyzer ready (platform={settings.platform} {settings.platform_version})")

    yield

    # Shutdown
    logger.info("Shutting down Human Typed Input service...")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Human Typed Input",
    description="Local human typing confidence analysis",
    version=__version__,
    lifespan=lifespan,
)


def _get_analyzer() -> HumanTypedAnalyzer:
    if state.analyzer is None:
        state.analyzer = HumanTypedAnalyzer()
    return state.analyzer


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


# =============================================================================
# Analysis Endpoints
# =============================================================================

@app.post(
    "/analyze",
    response_model=AnalyzeResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def analyze(payload: EventLog):
    """
    Score a typing session.

    - Aggregates the event log into metrics
    - Returns the six-factor confidence breakdown
    - Never returns raw events or content
    """
    analyzer = _get_analyzer()
    metrics, score = analyzer.analyze(payload)
    exporter = analyzer.exporter

    return AnalyzeResponse(
        metrics=exporter.build_metrics(metrics),
        confidence=exporter.build_confidence(score),
    )


@app.post("/export")
async def export(payload: ExportRequest):
    """
    Export a typing proof.

    - Applies the requested preset or explicit options
    - Serializes with sorted keys (byte-identical for identical inputs)
    """
    analyzer = _get_analyzer()

    try:
        body = analyzer.export_typing_proof_json(
            payload.session,
            options=payload.resolved_options(),
            text=payload.text,
            monotonic_now=payload.monotonic_now,
        )
    except EncodingFailed as e:
        logger.error(f"Proof encoding error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error encoding typing proof"
        )

    return Response(content=body, media_type="application/json")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
