"""
Search filters compiled to SQL criteria.

Each stage of the search (characters by name, quotes by text, episodes by
season/number) becomes an `IN (SELECT ...)` subquery that narrows the next,
so the whole chain runs as one statement. A stage without filters adds no
criteria: it matches everything. A stage that matches nothing empties every
stage downstream of it.
"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.sql import Select

from app.models import models
from app.models.schemas import SearchFilters


def text_matches(column, patterns: List[str]):
    """Case-insensitive substring match against ANY of the patterns.

    Patterns are matched literally; LIKE wildcards in user input are escaped.
    """
    return or_(*[column.icontains(pattern, autoescape=True) for pattern in patterns])


def character_criteria(names: Optional[List[str]]) -> list:
    if not names:
        return []
    return [text_matches(models.Character.name, names)]


def matching_character_ids(names: List[str]) -> Select:
    return select(models.Character.id).where(*character_criteria(names))


def episode_criteria(filters: SearchFilters) -> list:
    criteria = []
    if filters.seasons:
        criteria.append(models.Episode.season.in_(filters.seasons))
    if filters.episodes:
        criteria.append(models.Episode.number.in_(filters.episodes))
    return criteria


def episode_conversation_ids(filters: SearchFilters) -> Optional[Select]:
    """Ids of conversations inside the episodes matched by season/number."""
    if not filters.has_episode_filters():
        return None

    link = models.episode_conversations
    return (
        select(link.c.conversation_id)
        .join(models.Episode, models.Episode.id == link.c.episode_id)
        .where(*episode_criteria(filters))
    )


def quote_text_criteria(filters: SearchFilters) -> list:
    """Criteria on the quote itself: who said it and what was said."""
    criteria = []
    if filters.names:
        criteria.append(
            models.Quote.character_id.in_(matching_character_ids(filters.names))
        )
    if filters.quotes:
        criteria.append(text_matches(models.Quote.text, filters.quotes))
    return criteria


def quote_criteria(filters: SearchFilters) -> list:
    criteria = quote_text_criteria(filters)

    conversation_ids = episode_conversation_ids(filters)
    if conversation_ids is not None:
        link = models.ConversationQuote
        criteria.append(
            models.Quote.id.in_(
                select(link.quote_id).where(link.conversation_id.in_(conversation_ids))
            )
        )
    return criteria


def conversation_criteria(filters: SearchFilters) -> list:
    criteria = []

    text_criteria = quote_text_criteria(filters)
    if text_criteria:
        link = models.ConversationQuote
        matching_quotes = select(models.Quote.id).where(*text_criteria)
        criteria.append(
            models.Conversation.id.in_(
                select(link.conversation_id).where(link.quote_id.in_(matching_quotes))
            )
        )

    conversation_ids = episode_conversation_ids(filters)
    if conversation_ids is not None:
        criteria.append(models.Conversation.id.in_(conversation_ids))

    return criteria
