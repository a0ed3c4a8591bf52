"""Health check endpoints"""
from fastapi import APIRouter
from typeflip.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "UP", "service": settings.SERVICE_NAME}


@router.get("/info")
async def info():
    """Service info endpoint"""
    from typeflip import __version__
    return {
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "description": "Conditional type <-> branch function translator",
        "translation": {
            "bottomSentinel": settings.BOTTOM_SENTINEL,
            "indentSize": settings.INDENT_SIZE,
            "defaultMode": settings.DEFAULT_MODE,
            "maxSourceChars": settings.MAX_SOURCE_CHARS
        }
    }
