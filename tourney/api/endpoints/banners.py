from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from tourney.api.dependencies import get_settings
from tourney.core.config import Settings
from tourney.services.banner_service import resolve_banner_path

router = APIRouter()


@router.get("/{tournament_id}", response_class=FileResponse)
async def get_tournament_banner(tournament_id: str, settings: Settings = Depends(get_settings)):
    path = resolve_banner_path(settings.banner_dir, tournament_id)
    if path is None:
        raise HTTPException(status_code=404, detail="Banner image not found")
    return FileResponse(path, headers={"Cache-Control": "public, max-age=86400"})
