from fastapi import APIRouter

from app.services.sportradar import is_api_enabled

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "message": "Hockey Predictor API is running",
        "sportradar_enabled": is_api_enabled(),
        "disclaimer": "SIMULATION ONLY - Model prices are not market odds."
    }
