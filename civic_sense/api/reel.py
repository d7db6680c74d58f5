from fastapi import APIRouter

from civic_sense.models.reel import Reel, ReelCreate
from civic_sense.schemas.responses import ReelCreatedResponseSchema
from civic_sense.services.reel import ReelService

router = APIRouter(prefix="/reels", tags=["reel"])
reel_service = ReelService()


@router.get("", response_model=list[Reel])
async def get_reels() -> list[Reel]:
    return await reel_service.get_reels()


@router.post("", response_model=ReelCreatedResponseSchema)
async def create_reel(reel: ReelCreate) -> ReelCreatedResponseSchema:
    created = await reel_service.create_reel(reel)
    return ReelCreatedResponseSchema(message="Reel added successfully", reel=created)
