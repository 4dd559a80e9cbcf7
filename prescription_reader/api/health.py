from fastapi import APIRouter

from prescription_reader.config import settings
from prescription_reader.analyzers.factory import normalized_mode, normalized_provider

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    return {
        "status": "ok",
        "mode": normalized_mode(settings),
        "provider": normalized_provider(settings),
    }
