from typing import List, Optional

from fastapi import Depends, Query

from app.models import schemas


def name_filters(
    names: Optional[List[str]] = Query(None, alias="names[]", description="Character name fragments"),
) -> Optional[List[str]]:
    return names


def search_filters(
    names: Optional[List[str]] = Depends(name_filters),
    quotes: Optional[List[str]] = Query(None, alias="quotes[]", description="Quote text fragments"),
    seasons: Optional[List[int]] = Query(None, alias="seasons[]", description="Season numbers"),
    episodes: Optional[List[int]] = Query(None, alias="episodes[]", description="Episode numbers"),
) -> schemas.SearchFilters:
    """Collect the repeatable `field[]` query parameters into SearchFilters.

    Non-integer seasons/episodes fail request validation (400 bad request).
    """
    return schemas.SearchFilters(
        names=names, quotes=quotes, seasons=seasons, episodes=episodes
    )


def page_number(page: int = Query(1, ge=1, description="Page number (1-indexed)")) -> int:
    return page
