import logging
import uuid as uuid_pkg
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql import func

from app import config
from app.exceptions import NotFoundError
from app.models import models, schemas
from app.services.episode_resolver import EpisodeResolver
from app.services.pagination import paginate
from app.services.search import quote_criteria

logger = logging.getLogger(__name__)


class QuoteService:
    def __init__(self, db: Session):
        self.db = db
        self.limit = config.PAGINATION_LIMIT

    def _query(self):
        return self.db.query(models.Quote).options(joinedload(models.Quote.character))

    def _serialize(self, quotes: List[models.Quote], episodes: Dict) -> List[schemas.Quote]:
        return [
            schemas.Quote(
                id=quote.id,
                quote=quote.text,
                character=schemas.Character.model_validate(quote.character),
                episode=episodes.get(quote.id, {}),
            )
            for quote in quotes
        ]

    def _page(
        self, criteria: list, page: int, filters: Optional[schemas.SearchFilters] = None
    ) -> Dict:
        query = self._query().filter(*criteria).order_by(models.Quote.id)
        result = paginate(query, page, self.limit)

        quotes = result["result"]
        episodes = EpisodeResolver(self.db, filters).for_quotes(q.id for q in quotes)
        result["result"] = self._serialize(quotes, episodes)
        return result

    def list_quotes(self, page: int = 1) -> Dict:
        return self._page([], page)

    def search_quotes(self, filters: schemas.SearchFilters, page: int = 1) -> Dict:
        """
        Quotes matching every supplied filter.

        - names: the quote's character name contains any of them
        - quotes: the quote text contains any of them
        - seasons / episodes: the quote sits in a conversation of a matching episode

        Filters left out do not narrow the result.
        """
        logger.debug(f"Quote search {filters.model_dump(exclude_none=True)} page={page}")
        return self._page(quote_criteria(filters), page, filters)

    def get_quote(self, quote_id: str) -> schemas.Quote:
        quote = (
            self._query()
            .filter(models.Quote.id == uuid_pkg.UUID(quote_id))
            .first()
        )
        if not quote:
            raise NotFoundError()

        episodes = EpisodeResolver(self.db).for_quotes([quote.id])
        return self._serialize([quote], episodes)[0]

    def random_quote(self) -> schemas.Quote:
        quote = self._query().order_by(func.random()).limit(1).first()
        if not quote:
            raise NotFoundError()

        episodes = EpisodeResolver(self.db).for_quotes([quote.id])
        return self._serialize([quote], episodes)[0]
