from __future__ import annotations

import logging
import time
from functools import lru_cache

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from prescription_reader.config import settings
from prescription_reader.analyzers.factory import create_analyzer
from prescription_reader.analyzers.hosted_analyzer import HostedImageAnalyzer
from prescription_reader.analyzers.schema import PrescriptionRecord
from prescription_reader.api.schemas_analysis import AnalyzeImageResponse
from prescription_reader.preprocessing.image_upload import load_image_upload
from prescription_reader.ui.state import AnalysisSession, Failed, Succeeded
from prescription_reader.ui.view import build_result_view
from prescription_reader.observability.metrics import UPLOAD_BYTES

router = APIRouter(prefix="/analyze", tags=["analyze"])

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_image_analyzer() -> HostedImageAnalyzer:
    """
    Dependency provider for the analyzer. Built once from settings;
    tests replace it through app.dependency_overrides.
    """
    return create_analyzer(settings)


@router.post("/image", response_model=AnalyzeImageResponse)
async def analyze_image(
    file: UploadFile = File(...),
    analyzer: HostedImageAnalyzer = Depends(get_image_analyzer),
):
    image = await load_image_upload(file, max_mb=settings.max_image_mb)
    UPLOAD_BYTES.observe(image.size)

    # one session per request: one file, one submission
    session = AnalysisSession(analyzer)
    session.select(image)

    t0 = time.perf_counter()
    state = await session.submit()
    duration_ms = int((time.perf_counter() - t0) * 1000)

    if isinstance(state, Failed):
        if state.error is not None:
            raise state.error
        raise HTTPException(status_code=400, detail={"code": "invalid_parameters", "message": state.message})

    assert isinstance(state, Succeeded)
    result = state.result

    logger.info(
        "image_analyze ok mode=%s model=%s duration_ms=%d filename=%s media_type=%s",
        analyzer.mode,
        analyzer.model_name,
        duration_ms,
        file.filename,
        image.media_type,
    )

    return {
        "mode": analyzer.mode,
        "result": result.to_wire() if isinstance(result, PrescriptionRecord) else result,
        "view": build_result_view(result),
        "details": {
            "model": {"name": analyzer.model_name, "provider": settings.model_provider},
            "meta": {
                "duration_ms": duration_ms,
                "filename": file.filename,
                "media_type": image.media_type,
                "size_bytes": image.size,
            },
        },
    }
