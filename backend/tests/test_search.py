"""
Test suite for search query resolution.

Tests cover:
- Case-insensitive substring matching on names and quote text
- OR within one filter, AND across filters
- Season/episode narrowing through conversation membership
- Empty stages degrading to "not found"
- No filters returning the index result set
- LIKE wildcards in user input matched literally
"""

import pytest

from app.exceptions import NotFoundError
from app.models.schemas import SearchFilters
from app.services.character_service import CharacterService
from app.services.conversation_service import ConversationService
from app.services.quote_service import QuoteService


def quote_texts(result):
    return sorted(q.quote for q in result["result"])


class TestCharacterSearch:

    def test_substring_case_insensitive(self, test_db, office_dataset):
        """Searching "jim" matches "Jim Halpert"."""
        result = CharacterService(test_db).search_characters(["jim"])

        assert [c.name for c in result["result"]] == ["Jim Halpert"]
        assert result["total"] == 1

    def test_any_of_several_names(self, test_db, office_dataset):
        result = CharacterService(test_db).search_characters(["JIM", "beesly"])

        assert sorted(c.name for c in result["result"]) == ["Jim Halpert", "Pam Beesly"]

    def test_no_names_equals_index(self, test_db, office_dataset, small_pages):
        service = CharacterService(test_db)

        searched = service.search_characters(None)
        listed = service.list_characters()

        assert searched["total"] == listed["total"]
        assert searched["pages"] == listed["pages"]
        assert [c.id for c in searched["result"]] == [c.id for c in listed["result"]]

    def test_no_match_not_found(self, test_db, office_dataset):
        with pytest.raises(NotFoundError):
            CharacterService(test_db).search_characters(["Toby"])

    def test_wildcards_are_literal(self, test_db, office_dataset):
        """'%' and '_' in a name filter do not act as LIKE wildcards."""
        service = CharacterService(test_db)

        with pytest.raises(NotFoundError):
            service.search_characters(["%"])
        with pytest.raises(NotFoundError):
            service.search_characters(["_im"])


class TestQuoteSearch:

    def test_by_name(self, test_db, office_dataset):
        result = QuoteService(test_db).search_quotes(SearchFilters(names=["dwight"]))

        assert quote_texts(result) == [
            "Bears. Beets. Battlestar Galactica.",
            "Identity theft is not a joke, Jim!",
        ]

    def test_by_text(self, test_db, office_dataset):
        result = QuoteService(test_db).search_quotes(SearchFilters(quotes=["BEETS"]))

        assert quote_texts(result) == [
            "Bears eat beets.",
            "Bears. Beets. Battlestar Galactica.",
        ]

    def test_name_and_text_combined(self, test_db, office_dataset):
        """Different filters are AND-ed."""
        result = QuoteService(test_db).search_quotes(
            SearchFilters(names=["jim"], quotes=["beets"])
        )

        assert quote_texts(result) == ["Bears eat beets."]

    def test_by_season(self, test_db, office_dataset):
        result = QuoteService(test_db).search_quotes(SearchFilters(seasons=[3]))

        assert quote_texts(result) == ["Bears eat beets.", "That's what she said."]
        assert all(q.episode.season == 3 for q in result["result"])

    def test_season_excludes_quotes_without_episode(self, test_db, office_dataset):
        """The orphan conversation's quote has no season, so it drops out."""
        result = QuoteService(test_db).search_quotes(
            SearchFilters(names=["dwight"], seasons=[2, 3])
        )

        assert quote_texts(result) == ["Bears. Beets. Battlestar Galactica."]

    def test_season_and_episode_number(self, test_db, office_dataset):
        service = QuoteService(test_db)

        result = service.search_quotes(SearchFilters(seasons=[2], episodes=[1]))
        assert result["total"] == 4

        with pytest.raises(NotFoundError):
            service.search_quotes(SearchFilters(seasons=[3], episodes=[1]))

    def test_no_filters_equals_index(self, test_db, office_dataset, small_pages):
        service = QuoteService(test_db)

        searched = service.search_quotes(SearchFilters())
        listed = service.list_quotes()

        assert searched["total"] == listed["total"] == 7
        assert searched["pages"] == listed["pages"]

    def test_empty_character_stage_not_found(self, test_db, office_dataset):
        """No character matches, so no quote can match."""
        with pytest.raises(NotFoundError):
            QuoteService(test_db).search_quotes(
                SearchFilters(names=["Creed"], quotes=["beets"])
            )

    def test_search_results_paginate(self, test_db, office_dataset, small_pages):
        service = QuoteService(test_db)

        first = service.search_quotes(SearchFilters(seasons=[2]), page=1)
        second = service.search_quotes(SearchFilters(seasons=[2]), page=2)

        assert first["total"] == 4
        assert first["pages"] == 2
        assert len(first["result"]) == 3
        assert len(second["result"]) == 1
        with pytest.raises(NotFoundError):
            service.search_quotes(SearchFilters(seasons=[2]), page=3)


class TestConversationSearch:

    def test_by_name(self, test_db, office_dataset):
        result = ConversationService(test_db).search_conversations(
            SearchFilters(names=["pam"])
        )

        expected = office_dataset["conversations"]["dundies_chilis"]
        assert [c.id for c in result["result"]] == [expected.id]

    def test_name_in_any_quote(self, test_db, office_dataset):
        """A conversation matches when any of its quotes matches."""
        result = ConversationService(test_db).search_conversations(
            SearchFilters(names=["jim"])
        )

        conversations = office_dataset["conversations"]
        assert sorted(c.id for c in result["result"]) == sorted(
            [conversations["dundies_chilis"].id, conversations["benihana"].id]
        )

    def test_name_and_season(self, test_db, office_dataset):
        result = ConversationService(test_db).search_conversations(
            SearchFilters(names=["jim"], seasons=[2])
        )

        conversation = result["result"][0]
        assert result["total"] == 1
        assert conversation.id == office_dataset["conversations"]["dundies_chilis"].id
        assert conversation.episode.name == "The Dundies"

    def test_name_and_text_must_match_same_quote(self, test_db, office_dataset):
        """Pam never says "beets", so the Pam + beets search is empty."""
        with pytest.raises(NotFoundError):
            ConversationService(test_db).search_conversations(
                SearchFilters(names=["pam"], quotes=["beets"])
            )

    def test_by_episode_number(self, test_db, office_dataset):
        result = ConversationService(test_db).search_conversations(
            SearchFilters(episodes=[10])
        )

        assert [c.id for c in result["result"]] == [
            office_dataset["conversations"]["benihana"].id
        ]

    def test_no_filters_equals_index(self, test_db, office_dataset):
        service = ConversationService(test_db)

        searched = service.search_conversations(SearchFilters())
        listed = service.list_conversations()

        assert searched["total"] == listed["total"] == 4
        assert [c.id for c in searched["result"]] == [c.id for c in listed["result"]]

    def test_unknown_season_not_found(self, test_db, office_dataset):
        with pytest.raises(NotFoundError):
            ConversationService(test_db).search_conversations(SearchFilters(seasons=[9]))
