from pydantic import BaseModel, Field
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union
import uuid

T = TypeVar("T")


class Character(BaseModel):
    id: uuid.UUID
    name: str

    class Config:
        from_attributes = True


class EpisodeInfo(BaseModel):
    """Episode metadata embedded in quotes and conversations."""
    # No defaults: an empty dict must not validate as an EpisodeInfo
    name: Optional[str]
    number: int
    season: int

    class Config:
        from_attributes = True


class ConversationLine(BaseModel):
    id: uuid.UUID
    quote: str
    character: Character


class Quote(ConversationLine):
    # {} when no episode contains the quote's conversation
    episode: Union[EpisodeInfo, Dict[str, Any]] = Field(default_factory=dict)


class Conversation(BaseModel):
    id: uuid.UUID
    quotes: List[ConversationLine]
    episode: Union[EpisodeInfo, Dict[str, Any]] = Field(default_factory=dict)


class SearchFilters(BaseModel):
    names: Optional[List[str]] = None
    quotes: Optional[List[str]] = None
    seasons: Optional[List[int]] = None
    episodes: Optional[List[int]] = None

    def has_episode_filters(self) -> bool:
        return bool(self.seasons or self.episodes)


class ItemResponse(BaseModel, Generic[T]):
    status: str = "ok"
    result: T


class PaginatedResponse(BaseModel, Generic[T]):
    status: str = "ok"
    result: List[T]
    total: int
    page: int
    pages: int
    limit: int
