from fastapi import APIRouter

from app.api.v1.export import router as export_router
from app.api.v1.gemini import router as gemini_router
from app.api.v1.prompt_engine import router as prompt_engine_router

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(prompt_engine_router)
api_v1_router.include_router(gemini_router)
api_v1_router.include_router(export_router)
