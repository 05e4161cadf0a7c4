"""Pydantic models for persisted records."""

from pydantic import BaseModel, TypeAdapter


class StickerRecord(BaseModel):
    """One sticker in the persisted collection."""

    id: int
    is_collected: bool
    name: str | None = None
    is_premium: bool | None = None


STICKER_RECORDS = TypeAdapter(list[StickerRecord])
PREMIUM_FLAG = TypeAdapter(bool)
