"""Now-playing metadata endpoint."""

from typing import Any

from fastapi import APIRouter

from radio_ratings.api.dependencies import MetadataClientDep

router = APIRouter(prefix="/api", tags=["now-playing"])


@router.get("/now-playing")
async def get_now_playing(client: MetadataClientDep) -> dict[str, Any]:
    """Return the station's current and recent tracks with the current track id."""
    now_playing = await client.fetch_now_playing()
    return now_playing.to_dict()
