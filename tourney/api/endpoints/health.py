from fastapi import APIRouter, Depends

from tourney.api.dependencies import get_storage
from tourney.services.storage import Storage

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(storage: Storage = Depends(get_storage)):
    return {"status": "ok", "storage": storage.name}
