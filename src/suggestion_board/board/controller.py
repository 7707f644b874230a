"""
Event handlers for the suggestion board.

``SuggestionBoard`` owns the current ``BoardState`` and the API client. Each
public method handles one user event. It updates state through the pure
functions in ``board.state``, then calls the backend explicitly when the
event needs it. Backend failures are logged and leave state unchanged.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

from loguru import logger

from ..api import APIError, SuggestionAPIClient
from ..config import Settings, get_settings
from ..models import Comment, FilterType, Suggestion
from ..utils.formatting import format_locale_datetime, format_timestamp
from . import state as board_state
from .state import BoardState


class SuggestionBoard:
    """
    View controller for browsing, filtering, voting and commenting.

    The host page calls one method per user event and renders from
    ``state`` afterwards.
    """

    def __init__(self, client: SuggestionAPIClient, settings: Optional[Settings] = None):
        """
        Initialize the board.

        Args:
            client: Suggestion API client
            settings: Settings to use instead of the cached defaults
        """
        self.client = client
        self.settings = settings or get_settings()
        # None converts aware timestamps to the host local timezone
        self.tz = ZoneInfo(self.settings.display_timezone) if self.settings.display_timezone else None
        self.state: BoardState = board_state.initial_state(self.settings.default_page_size)

    # -----------------------------------------------------------------------
    # Loading
    # -----------------------------------------------------------------------

    def load(self) -> None:
        """Fetch the current user, the categories and the first suggestion list."""
        try:
            user_name = self.client.get_current_user_name()
            self.state = board_state.set_user_name(self.state, user_name)
        except APIError as e:
            logger.error(f"Error fetching user name: {e}")

        try:
            categories = self.client.get_categories()
            self.state = board_state.set_categories(self.state, categories)
        except APIError as e:
            logger.error(f"Error fetching categories: {e}")

        self.refresh_suggestions()

    def check_health(self) -> Dict[str, Any]:
        """
        Check that the suggestion backend is reachable.

        Returns:
            Health check results
        """
        try:
            health = self.client.health_check()
            return {
                "status": "healthy",
                "api_status": health,
                "timestamp": datetime.now().isoformat()
            }
        except APIError as e:
            logger.error(f"Suggestion API health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": str(e),
                "timestamp": datetime.now().isoformat()
            }

    def refresh_suggestions(self) -> bool:
        """
        Fetch the suggestion list for the committed filters.

        Returns:
            bool: True if the response was applied, False if it failed or was stale
        """
        self.state, token = board_state.begin_suggestions_request(self.state)
        filters = self.state.filters

        try:
            suggestions = self.client.get_suggestions(
                filter_type=filters.filter_type,
                categories=filters.applied_categories,
                search_query=filters.search_query
            )
        except APIError as e:
            logger.error(f"Error fetching suggestions: {e}")
            return False

        if token != self.state.request_token:
            logger.debug(f"Discarding stale suggestions response (token {token})")
            return False

        self.state = board_state.receive_suggestions(self.state, token, suggestions)
        logger.info(f"Fetched {len(suggestions)} suggestions")
        return True

    # -----------------------------------------------------------------------
    # Search and filters
    # -----------------------------------------------------------------------

    def search(self, query: str) -> None:
        self.state = board_state.set_search_query(self.state, query)
        self.refresh_suggestions()

    def set_filter_type(self, filter_type: FilterType) -> None:
        self.state = board_state.set_filter_type(self.state, filter_type)
        self.refresh_suggestions()

    def filter_all(self) -> None:
        self.set_filter_type(FilterType.ALL)

    def filter_recent(self) -> None:
        self.set_filter_type(FilterType.RECENT)

    def filter_highest_ranked(self) -> None:
        self.set_filter_type(FilterType.HIGHEST_RANKED)

    def toggle_category(self, category: str, checked: bool) -> None:
        """Tick a category checkbox. Nothing is fetched until the filter is applied."""
        self.state = board_state.toggle_category(self.state, category, checked)

    def apply_category_filter(self) -> None:
        self.state = board_state.apply_category_filter(self.state)
        self.refresh_suggestions()

    # -----------------------------------------------------------------------
    # Pagination
    # -----------------------------------------------------------------------

    def set_page_size(self, page_size: int) -> None:
        self.state = board_state.set_page_size(self.state, int(page_size))

    def next_page(self) -> None:
        self.state = board_state.next_page(self.state)

    def previous_page(self) -> None:
        self.state = board_state.previous_page(self.state)

    @property
    def visible_suggestions(self) -> Tuple[Suggestion, ...]:
        return board_state.visible_suggestions(self.state)

    # -----------------------------------------------------------------------
    # Creating suggestions
    # -----------------------------------------------------------------------

    def show_create_modal(self) -> None:
        self.state = board_state.show_create_modal(self.state)

    def hide_create_modal(self) -> None:
        self.state = board_state.hide_create_modal(self.state)

    def update_suggestion_draft(self, **fields: str) -> None:
        self.state = board_state.update_suggestion_draft(self.state, **fields)

    def submit_suggestion(self) -> bool:
        """
        Create a suggestion from the draft, submitted as the current user.

        Returns:
            bool: True if the backend accepted it
        """
        draft = self.state.suggestion_draft
        try:
            self.client.create_suggestion(
                title=draft.title,
                description=draft.description,
                category=draft.category,
                submitter=self.state.user_name
            )
        except APIError as e:
            logger.error(f"Error creating suggestion: {e}")
            return False

        self.state = board_state.hide_create_modal(self.state)
        self.state = board_state.reset_suggestion_draft(self.state)
        self.refresh_suggestions()
        return True

    # -----------------------------------------------------------------------
    # Voting
    # -----------------------------------------------------------------------

    def upvote(self, suggestion_id: str) -> bool:
        try:
            self.client.upvote_suggestion(suggestion_id)
        except APIError as e:
            logger.error(f"Error upvoting suggestion: {e}")
            return False
        self.refresh_suggestion(suggestion_id)
        return True

    def downvote(self, suggestion_id: str) -> bool:
        try:
            self.client.downvote_suggestion(suggestion_id)
        except APIError as e:
            logger.error(f"Error downvoting suggestion: {e}")
            return False
        self.refresh_suggestion(suggestion_id)
        return True

    def refresh_suggestion(self, suggestion_id: str) -> None:
        """Refetch one suggestion so its vote counts match the backend."""
        try:
            suggestion = self.client.get_suggestion(suggestion_id)
        except APIError as e:
            logger.error(f"Error fetching suggestion {suggestion_id}: {e}")
            return
        self.state = board_state.replace_suggestion(self.state, suggestion)

    # -----------------------------------------------------------------------
    # Detail view and comments
    # -----------------------------------------------------------------------

    def open_suggestion(self, suggestion_id: str) -> None:
        """Show a suggestion in the detail modal and load its comments."""
        if board_state.find_suggestion(self.state, suggestion_id) is None:
            logger.warning(f"Suggestion {suggestion_id} is not in the current list")
            return
        self.state = board_state.open_detail(self.state, suggestion_id)
        self.refresh_comments(suggestion_id)

    def hide_detail_modal(self) -> None:
        self.state = board_state.hide_detail_modal(self.state)

    def show_comment_modal(self, suggestion_id: str) -> None:
        self.state = board_state.show_comment_modal(self.state, suggestion_id)

    def hide_comment_modal(self) -> None:
        self.state = board_state.hide_comment_modal(self.state)

    def update_comment_draft(self, **fields: str) -> None:
        self.state = board_state.update_comment_draft(self.state, **fields)

    def refresh_comments(self, suggestion_id: str) -> None:
        try:
            comments = self.client.get_comments(suggestion_id)
        except APIError as e:
            logger.error(f"Error fetching comments: {e}")
            return
        self.state = board_state.set_comments(self.state, suggestion_id, comments)

    def submit_comment(self) -> bool:
        """
        Add the drafted comment to its suggestion.

        Returns:
            bool: True if the backend accepted it
        """
        draft = self.state.comment_draft
        if draft.suggestion_id is None:
            logger.warning("No suggestion selected for comment")
            return False

        try:
            self.client.add_comment(
                suggestion_id=draft.suggestion_id,
                text=draft.text,
                first_name=draft.first_name,
                last_name=draft.last_name
            )
        except APIError as e:
            logger.error(f"Error adding comment: {e}")
            return False

        self.state = board_state.reset_comment_draft(self.state)
        self.state = board_state.hide_comment_modal(self.state)
        self.refresh_comments(draft.suggestion_id)
        return True

    def delete_comment(self, comment_id: str) -> bool:
        try:
            self.client.delete_comment(comment_id)
        except APIError as e:
            logger.error(f"Error deleting comment: {e}")
            return False
        self.state = board_state.remove_comment(self.state, comment_id)
        return True

    # -----------------------------------------------------------------------
    # Display rows
    # -----------------------------------------------------------------------

    def _localize(self, value: datetime) -> datetime:
        return value.astimezone(self.tz) if value.tzinfo is not None else value

    def _format(self, value: Optional[datetime]) -> str:
        return format_timestamp(self._localize(value)) if value is not None else ""

    def suggestion_rows(self) -> List[Dict[str, Any]]:
        """
        Prepare the current page for display.

        Returns:
            List of dicts with the submission date already formatted
        """
        return [
            {
                "id": s.id,
                "title": s.title,
                "description": s.description or "",
                "category": s.category or "",
                "submitter": s.submitter or "",
                "submitted": self._format(s.submission_date),
                "upvotes": s.upvote_count,
                "downvotes": s.downvote_count,
                "comments": len(s.comments),
            }
            for s in self.visible_suggestions
        ]

    def detail_row(self) -> Optional[Dict[str, Any]]:
        """Prepare the suggestion shown in the detail modal, with a long-form date."""
        s = self.state.detail_suggestion
        if s is None:
            return None
        return {
            "id": s.id,
            "title": s.title,
            "description": s.description or "",
            "category": s.category or "",
            "submitter": s.submitter or "",
            "submitted": (
                format_locale_datetime(self._localize(s.submission_date))
                if s.submission_date is not None else ""
            ),
            "upvotes": s.upvote_count,
            "downvotes": s.downvote_count,
        }

    def comment_rows(self, comments: Optional[Tuple[Comment, ...]] = None) -> List[Dict[str, Any]]:
        """Format a comment thread (the detail thread by default) for display."""
        if comments is None:
            comments = self.state.detail_comments
        return [
            {
                "id": c.id,
                "text": c.text,
                "submitter": c.submitter or "",
                "posted": self._format(c.comment_date),
            }
            for c in comments
        ]
