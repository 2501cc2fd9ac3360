"""
FastAPI routes for tactical analysis.
"""

from functools import lru_cache

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from .config import get_settings
from .errors import AnalysisError, ErrorKind, MissingCredentialError
from .models import LinkAnalysisRequest
from .pipeline import AnalysisPipeline

router = APIRouter(prefix="/analysis", tags=["analysis"])


ERROR_STATUS = {
    ErrorKind.INVALID_LINK: 400,
    ErrorKind.UNVERIFIABLE_VIDEO: 424,
    ErrorKind.UNPARSABLE_RESPONSE: 422,
    ErrorKind.MODEL_DECLINED_IDENTIFICATION: 422,
    ErrorKind.MISSING_VIDEO_ID: 422,
    ErrorKind.VIDEO_ID_MISMATCH: 422,
    ErrorKind.TITLE_MISMATCH: 422,
    ErrorKind.FRAME_EXTRACTION_FAILED: 422,
    ErrorKind.MISSING_CREDENTIAL: 500,
}


def _to_http_error(error: AnalysisError) -> HTTPException:
    return HTTPException(status_code=ERROR_STATUS.get(error.kind, 500), detail=error.to_dict())


@lru_cache(maxsize=1)
def _build_pipeline() -> AnalysisPipeline:
    return AnalysisPipeline(get_settings())


def get_pipeline() -> AnalysisPipeline:
    """Get the process-wide pipeline (fails fast without a credential)."""
    try:
        return _build_pipeline()
    except MissingCredentialError as e:
        print(f"[ANALYSIS ROUTE] Configuration error: {e.message}")
        raise _to_http_error(e)


@router.post("/link")
async def analyze_link(request: LinkAnalysisRequest, pipeline: AnalysisPipeline = Depends(get_pipeline)):
    """
    Analyze a public YouTube video.

    Returns the analysis only if the model's videoId and videoTitle match the
    requested video; otherwise returns the guard's error.
    """
    try:
        document = await pipeline.analyze_link(request.url, request.mode)
        return JSONResponse(content=document.to_response())
    except AnalysisError as e:
        raise _to_http_error(e)
    except Exception as e:
        print(f"[ANALYSIS ROUTE] Generation failed: {e}")
        raise HTTPException(status_code=502, detail=f"Analysis service error: {str(e)}")


@router.post("/file")
async def analyze_file(file: UploadFile = File(...), pipeline: AnalysisPipeline = Depends(get_pipeline)):
    """Analyze an uploaded video file from sampled frames."""
    try:
        data = await file.read()
        if not data:
            raise HTTPException(status_code=400, detail="Uploaded file is empty")

        document = await pipeline.analyze_file(file.filename or "video.mp4", data)
        return JSONResponse(content=document.to_response())
    except HTTPException:
        raise
    except AnalysisError as e:
        raise _to_http_error(e)
    except Exception as e:
        print(f"[ANALYSIS ROUTE] Visual analysis failed: {e}")
        raise HTTPException(status_code=502, detail=f"Analysis service error: {str(e)}")
