"""Shared fixtures for suggestion board tests."""

from datetime import datetime
from typing import Callable, List
from unittest.mock import Mock

import pytest
from loguru import logger

from suggestion_board.api import SuggestionAPIClient
from suggestion_board.config import Settings
from suggestion_board.models import Comment, Suggestion


def make_suggestion(index: int, **overrides) -> Suggestion:
    """Build a suggestion with predictable fields."""
    fields = {
        "id": f"s{index}",
        "title": f"Suggestion {index}",
        "description": f"Description {index}",
        "category": "General",
        "submitter": "Ada Lovelace",
        "submission_date": datetime(2024, 1, 5, 13, 5),
        "upvote_count": 0,
        "downvote_count": 0,
    }
    fields.update(overrides)
    return Suggestion(**fields)


def make_comment(comment_id: str, suggestion_id: str, text: str = "Nice idea") -> Comment:
    return Comment(
        id=comment_id,
        suggestion_id=suggestion_id,
        text=text,
        submitter="Grace Hopper",
        comment_date=datetime(2024, 1, 5, 0, 30),
    )


@pytest.fixture
def suggestions() -> List[Suggestion]:
    """Twelve suggestions, s1 to s12."""
    return [make_suggestion(i) for i in range(1, 13)]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        suggestion_api_base_url="http://test-api.com",
        default_page_size=5,
        display_timezone=None,
    )


@pytest.fixture
def mock_client() -> Mock:
    """API client mock with empty, successful defaults."""
    client = Mock(spec=SuggestionAPIClient)
    client.get_current_user_name.return_value = "Ada Lovelace"
    client.get_categories.return_value = ["General", "Facilities", "IT"]
    client.get_suggestions.return_value = []
    client.get_comments.return_value = []
    return client


@pytest.fixture
def log_messages() -> List[str]:
    """Collect loguru messages emitted during a test."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def suggestion_factory() -> Callable[..., Suggestion]:
    return make_suggestion


@pytest.fixture
def comment_factory() -> Callable[..., Comment]:
    return make_comment
