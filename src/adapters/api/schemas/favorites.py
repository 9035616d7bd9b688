from __future__ import annotations

from pydantic import BaseModel


class FavoritesSchema(BaseModel):
    stop_ids: list[str]


class FavoriteStatusSchema(BaseModel):
    stop_id: str
    is_favorite: bool
