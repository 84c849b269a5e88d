from sqlalchemy import Column, String, Integer, Text, ForeignKey, Table, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import text
from app.database import Base

# Shared by every primary key; tests swap it for a Python-side uuid4 default
UUID_SERVER_DEFAULT = text('gen_random_uuid()')


# Episode membership is a plain set of conversation ids. A conversation is
# expected to sit in at most one episode but nothing enforces it; lookups take
# the first match.
episode_conversations = Table(
    "episode_conversations",
    Base.metadata,
    Column("episode_id", UUID(as_uuid=True), ForeignKey("episodes.id", ondelete="CASCADE"), primary_key=True),
    Column("conversation_id", UUID(as_uuid=True), ForeignKey("conversations.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_episode_conversations_conversation", "conversation_id"),
)


class Character(Base):
    __tablename__ = "characters"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=UUID_SERVER_DEFAULT)
    name = Column(String(255), nullable=False, index=True)

    quotes = relationship("Quote", back_populates="character")


class Quote(Base):
    __tablename__ = "quotes"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=UUID_SERVER_DEFAULT)
    character_id = Column(UUID(as_uuid=True), ForeignKey("characters.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)

    character = relationship("Character", back_populates="quotes")
    placements = relationship("ConversationQuote", back_populates="quote")


class Conversation(Base):
    """
    An ordered exchange of quotes within one scene.

    Quote order lives on the association rows (ConversationQuote.position),
    so the same Quote row could appear in several conversations.
    """
    __tablename__ = "conversations"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=UUID_SERVER_DEFAULT)

    lines = relationship(
        "ConversationQuote",
        back_populates="conversation",
        order_by="ConversationQuote.position",
        cascade="all, delete-orphan",
    )
    episodes = relationship("Episode", secondary=episode_conversations, back_populates="conversations")

    @property
    def quotes(self):
        return [line.quote for line in self.lines]


class ConversationQuote(Base):
    __tablename__ = "conversation_quotes"

    conversation_id = Column(UUID(as_uuid=True), ForeignKey("conversations.id", ondelete="CASCADE"), primary_key=True)
    quote_id = Column(UUID(as_uuid=True), ForeignKey("quotes.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, nullable=False)

    conversation = relationship("Conversation", back_populates="lines")
    quote = relationship("Quote", back_populates="placements")

    __table_args__ = (
        Index("idx_conversation_quotes_quote", "quote_id"),
    )


class Episode(Base):
    __tablename__ = "episodes"
    __table_args__ = (
        Index("idx_episodes_season_number", "season", "number"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=UUID_SERVER_DEFAULT)
    name = Column(String(255), nullable=True)
    number = Column(Integer, nullable=False)
    season = Column(Integer, nullable=False)

    conversations = relationship("Conversation", secondary=episode_conversations, back_populates="episodes")
