"""
Brand analysis endpoint.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from agents.brand.exceptions import BrandAnalysisError, InvalidTargetError
from models.requests import AnalyzeRequest, ErrorResponse
from services.brand_analysis_service import BrandAnalysisService

router = APIRouter(tags=["analyze"])

logger = logging.getLogger(__name__)


def get_brand_analysis_service() -> BrandAnalysisService:
    """Default wiring: renderer from PAGE_RENDERER, credentials from the environment."""
    return BrandAnalysisService()


def _error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@router.post("/analyze")
async def analyze_url(
    request: Optional[AnalyzeRequest] = Body(default=None),
    service: BrandAnalysisService = Depends(get_brand_analysis_service),
):
    """Render the page at ``url`` and return its brand signals plus vibe."""
    url = request.url if request else None
    if not url or not url.strip():
        return _error(400, "URL is required")

    try:
        result = await service.analyze(url)
    except InvalidTargetError as e:
        return _error(400, "Invalid URL", e.message)
    except BrandAnalysisError as e:
        logger.error(f"Analysis failed for {url}: {e}")
        return _error(500, "Failed to analyze URL", e.message)
    except Exception as e:
        logger.exception(f"Unexpected error analyzing {url}")
        return _error(500, "Failed to analyze URL", str(e) or type(e).__name__)

    return JSONResponse(content=result.model_dump(mode="json", by_alias=True))
