from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_favorites_service
from src.adapters.api.schemas.favorites import FavoritesSchema, FavoriteStatusSchema
from src.app.services.favorites_service import FavoritesService

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=FavoritesSchema)
async def list_favorites(
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoritesSchema:
    return FavoritesSchema(stop_ids=list(await service.get_favorite_ids()))


@router.get("/{stop_id}", response_model=FavoriteStatusSchema)
async def get_favorite(
    stop_id: str,
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteStatusSchema:
    return FavoriteStatusSchema(
        stop_id=stop_id, is_favorite=await service.is_favorite(stop_id)
    )


@router.put("/{stop_id}", response_model=FavoriteStatusSchema)
async def add_favorite(
    stop_id: str,
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteStatusSchema:
    await service.add_favorite(stop_id)
    return FavoriteStatusSchema(stop_id=stop_id, is_favorite=True)


@router.delete("/{stop_id}", response_model=FavoriteStatusSchema)
async def remove_favorite(
    stop_id: str,
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteStatusSchema:
    await service.remove_favorite(stop_id)
    return FavoriteStatusSchema(stop_id=stop_id, is_favorite=False)


@router.post("/{stop_id}/toggle", response_model=FavoriteStatusSchema)
async def toggle_favorite(
    stop_id: str,
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteStatusSchema:
    state = await service.toggle_favorite(stop_id)
    return FavoriteStatusSchema(stop_id=stop_id, is_favorite=state)
