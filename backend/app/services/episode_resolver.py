import logging
from typing import Dict, Iterable, Optional

from sqlalchemy.orm import Session

from app.models import models, schemas
from app.services.search import episode_criteria

logger = logging.getLogger(__name__)


class EpisodeResolver:
    """
    Attach episode metadata to the conversations and quotes of one page.

    Works on the ids already on the page, so each call is a single query
    regardless of collection size. When an id appears under more than one
    episode the first one (by episode id) wins.
    """

    def __init__(self, db: Session, filters: Optional[schemas.SearchFilters] = None):
        self.db = db
        # Restrict resolution to the episodes a search matched
        self.criteria = episode_criteria(filters) if filters else []

    def _first_match(self, rows) -> Dict:
        resolved = {}
        for key, name, number, season in rows:
            if key in resolved:
                logger.warning(f"{key} belongs to more than one episode, keeping the first")
                continue
            resolved[key] = schemas.EpisodeInfo(name=name, number=number, season=season)
        return resolved

    def for_conversations(self, conversation_ids: Iterable) -> Dict:
        """
        Map conversation id -> EpisodeInfo for every id with a containing episode.

        Ids without an episode are absent from the result.
        """
        conversation_ids = list(conversation_ids)
        if not conversation_ids:
            return {}

        link = models.episode_conversations
        rows = (
            self.db.query(
                link.c.conversation_id,
                models.Episode.name,
                models.Episode.number,
                models.Episode.season,
            )
            .join(models.Episode, models.Episode.id == link.c.episode_id)
            .filter(link.c.conversation_id.in_(conversation_ids), *self.criteria)
            .order_by(link.c.conversation_id, models.Episode.id)
            .all()
        )
        return self._first_match(rows)

    def for_quotes(self, quote_ids: Iterable) -> Dict:
        """
        Map quote id -> EpisodeInfo, going quote -> conversation -> episode.
        """
        quote_ids = list(quote_ids)
        if not quote_ids:
            return {}

        link = models.episode_conversations
        placement = models.ConversationQuote
        rows = (
            self.db.query(
                placement.quote_id,
                models.Episode.name,
                models.Episode.number,
                models.Episode.season,
            )
            .join(link, link.c.conversation_id == placement.conversation_id)
            .join(models.Episode, models.Episode.id == link.c.episode_id)
            .filter(placement.quote_id.in_(quote_ids), *self.criteria)
            .order_by(placement.quote_id, placement.conversation_id, models.Episode.id)
            .all()
        )
        return self._first_match(rows)
