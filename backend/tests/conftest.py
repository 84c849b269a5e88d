"""
Pytest configuration and fixtures for testing.

Provides test database setup and teardown, isolated sessions for each test,
a small Office dataset and an HTTP client wired to the test session.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.database import Base, get_db
from app.models import models

# Use in-memory SQLite for fast tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def test_db():
    """
    Create a fresh test database for each test function.

    Yields a SQLAlchemy Session bound to a single shared connection
    (StaticPool), so the TestClient's worker threads see the same in-memory
    database as the test body.

    SQLite doesn't support gen_random_uuid(), so UUID primary keys get a
    Python-side uuid4 default instead.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign keys in SQLite (disabled by default)
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    import uuid as uuid_pkg
    from sqlalchemy.schema import ColumnDefault

    for table in Base.metadata.tables.values():
        for column in table.columns:
            if column.server_default is not None:
                default_str = str(column.server_default.arg)
                if 'gen_random_uuid' in default_str:
                    column.server_default = None
                    column.default = ColumnDefault(uuid_pkg.uuid4)

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(test_db):
    """TestClient with get_db overridden to hand out the test session."""
    from app.main import app

    def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _conversation(lines):
    conversation = models.Conversation()
    for position, (character, text) in enumerate(lines):
        quote = models.Quote(character=character, text=text)
        conversation.lines.append(models.ConversationQuote(quote=quote, position=position))
    return conversation


@pytest.fixture
def office_dataset(test_db):
    """
    Create a small Office dataset.

    Structure:
    - 4 Characters: Michael Scott, Jim Halpert, Dwight Schrute, Pam Beesly
    - S02E01 "The Dundies": conversations `dundies_bears` and `dundies_chilis`
    - S03E10 "A Benihana Christmas": conversation `benihana`
    - `orphan`: a conversation that no episode contains
    - 7 Quotes in total
    """
    michael = models.Character(name="Michael Scott")
    jim = models.Character(name="Jim Halpert")
    dwight = models.Character(name="Dwight Schrute")
    pam = models.Character(name="Pam Beesly")

    dundies_bears = _conversation([
        (michael, "Would I rather be feared or loved? Easy. Both."),
        (dwight, "Bears. Beets. Battlestar Galactica."),
    ])
    dundies_chilis = _conversation([
        (pam, "I feel God in this Chili's tonight."),
        (jim, "Congratulations, Pam."),
    ])
    benihana = _conversation([
        (jim, "Bears eat beets."),
        (michael, "That's what she said."),
    ])
    orphan = _conversation([
        (dwight, "Identity theft is not a joke, Jim!"),
    ])

    dundies = models.Episode(
        name="The Dundies",
        season=2,
        number=1,
        conversations=[dundies_bears, dundies_chilis],
    )
    christmas = models.Episode(
        name="A Benihana Christmas",
        season=3,
        number=10,
        conversations=[benihana],
    )

    test_db.add_all([dundies, christmas, orphan])
    test_db.commit()

    return {
        "characters": {"michael": michael, "jim": jim, "dwight": dwight, "pam": pam},
        "episodes": {"dundies": dundies, "christmas": christmas},
        "conversations": {
            "dundies_bears": dundies_bears,
            "dundies_chilis": dundies_chilis,
            "benihana": benihana,
            "orphan": orphan,
        },
    }


@pytest.fixture
def small_pages(monkeypatch):
    """Shrink the page size so the 7-quote dataset spans several pages."""
    from app import config

    monkeypatch.setattr(config, "PAGINATION_LIMIT", 3)
    return 3
