"""Prompt pack export endpoint: writes JSON files under EXPORT_DIR."""

from fastapi import APIRouter, Depends, Request

from app.core.config import Settings, get_settings
from app.core.rate_limit import EXPORT_LIMIT, limiter
from app.schemas.prompt_engine import ExportRequest
from app.services.export_service import export_pack

router = APIRouter(tags=["export"])


@router.post("/export")
@limiter.limit(EXPORT_LIMIT)
def export_prompt_pack(
    request: Request,
    body: ExportRequest,
    settings: Settings = Depends(get_settings),
):
    """Save a variant set. The file is then served under /exports/."""
    result = export_pack(
        settings.export_dir,
        project_name=body.project_name,
        base_prompt=body.base_prompt,
        variations=body.variations,
        metadata=body.metadata,
    )
    return result.to_response_dict()
