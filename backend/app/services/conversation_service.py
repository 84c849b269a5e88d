import logging
import uuid as uuid_pkg
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import func

from app import config
from app.exceptions import NotFoundError
from app.models import models, schemas
from app.services.episode_resolver import EpisodeResolver
from app.services.pagination import paginate
from app.services.search import conversation_criteria

logger = logging.getLogger(__name__)


class ConversationService:
    def __init__(self, db: Session):
        self.db = db
        self.limit = config.PAGINATION_LIMIT

    def _query(self):
        # conversation -> ordered lines -> quote -> character, one SELECT per level
        return self.db.query(models.Conversation).options(
            selectinload(models.Conversation.lines)
            .selectinload(models.ConversationQuote.quote)
            .selectinload(models.Quote.character)
        )

    def _serialize(
        self, conversations: List[models.Conversation], episodes: Dict
    ) -> List[schemas.Conversation]:
        return [
            schemas.Conversation(
                id=conversation.id,
                quotes=[
                    schemas.ConversationLine(
                        id=quote.id,
                        quote=quote.text,
                        character=schemas.Character.model_validate(quote.character),
                    )
                    for quote in conversation.quotes
                ],
                episode=episodes.get(conversation.id, {}),
            )
            for conversation in conversations
        ]

    def _page(
        self, criteria: list, page: int, filters: Optional[schemas.SearchFilters] = None
    ) -> Dict:
        query = self._query().filter(*criteria).order_by(models.Conversation.id)
        result = paginate(query, page, self.limit)

        conversations = result["result"]
        episodes = EpisodeResolver(self.db, filters).for_conversations(
            c.id for c in conversations
        )
        result["result"] = self._serialize(conversations, episodes)
        return result

    def list_conversations(self, page: int = 1) -> Dict:
        return self._page([], page)

    def search_conversations(self, filters: schemas.SearchFilters, page: int = 1) -> Dict:
        """
        Conversations matching every supplied filter.

        - names: some quote in the conversation is by a character whose name
          contains any of them
        - quotes: that same quote's text contains any of them
        - seasons / episodes: the conversation belongs to a matching episode

        Filters left out do not narrow the result.
        """
        logger.debug(
            f"Conversation search {filters.model_dump(exclude_none=True)} page={page}"
        )
        return self._page(conversation_criteria(filters), page, filters)

    def get_conversation(self, conversation_id: str) -> schemas.Conversation:
        conversation = (
            self._query()
            .filter(models.Conversation.id == uuid_pkg.UUID(conversation_id))
            .first()
        )
        if not conversation:
            raise NotFoundError()

        episodes = EpisodeResolver(self.db).for_conversations([conversation.id])
        return self._serialize([conversation], episodes)[0]

    def random_conversation(self) -> schemas.Conversation:
        conversation = self._query().order_by(func.random()).limit(1).first()
        if not conversation:
            raise NotFoundError()

        episodes = EpisodeResolver(self.db).for_conversations([conversation.id])
        return self._serialize([conversation], episodes)[0]
