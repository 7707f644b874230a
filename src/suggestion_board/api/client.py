"""
HTTP client for the suggestion backend API.

This module provides a client for the remote suggestion operations: listing
and filtering suggestions, categories, voting, and comment management.
"""

import time
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urljoin

import requests
from loguru import logger

from ..config import get_settings
from ..models import Comment, FilterType, NewComment, NewSuggestion, Suggestion


class APIError(Exception):
    """Custom exception for API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class SuggestionAPIClient:
    """
    HTTP client for the suggestion backend.

    Every operation is a single request/response exchange. Failures surface
    as ``APIError``; callers decide what to do with them.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        retries: Optional[int] = None
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL for the suggestion API
            timeout: Request timeout in seconds
            retries: Retry attempts per request (defaults to settings, normally 0)
        """
        settings = get_settings()
        self.base_url = base_url or settings.suggestion_api_base_url
        self.timeout = timeout or settings.api_timeout
        self.retries = settings.api_retries if retries is None else retries

        # Ensure base URL ends with /
        if not self.base_url.endswith('/'):
            self.base_url += '/'

        logger.info(f"Initialized SuggestionAPIClient with base_url: {self.base_url}")

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
        retries: Optional[int] = None
    ) -> requests.Response:
        """
        Make an HTTP request, retrying only when retries are configured.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            params: Query parameters
            json_data: JSON request body
            retries: Number of retry attempts

        Returns:
            requests.Response: HTTP response

        Raises:
            APIError: If the request fails after all attempts
        """
        url = urljoin(self.base_url, endpoint)
        retries = self.retries if retries is None else retries

        for attempt in range(retries + 1):
            try:
                logger.debug(f"Making {method} request to {url} (attempt {attempt + 1})")

                response = requests.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json_data,
                    timeout=self.timeout
                )
            except requests.exceptions.RequestException as e:
                if attempt < retries:
                    wait_time = 2 ** attempt
                    logger.warning(f"Request failed, retrying in {wait_time}s: {str(e)}")
                    time.sleep(wait_time)
                    continue
                raise APIError(f"Request failed: {str(e)}") from e

            if 200 <= response.status_code < 300:
                logger.debug(f"Request successful: {method} {url}")
                return response

            if response.status_code == 429 and attempt < retries:
                wait_time = 2 ** attempt  # Exponential backoff
                logger.warning(f"Rate limited, waiting {wait_time}s before retry")
                time.sleep(wait_time)
                continue

            raise APIError(f"HTTP {response.status_code}: {response.text}", response.status_code)

        raise APIError(f"Request failed after {retries} retries")

    @staticmethod
    def _json(response: requests.Response, what: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"Failed to parse {what} response: {str(e)}")

    def get_suggestions(
        self,
        filter_type: FilterType = FilterType.ALL,
        categories: Optional[Iterable[str]] = None,
        search_query: str = ""
    ) -> List[Suggestion]:
        """
        Retrieve suggestions matching the committed filters.

        Args:
            filter_type: Server-side ordering/filtering
            categories: Categories to restrict to (empty means all)
            search_query: Free-text search

        Returns:
            List[Suggestion]: Suggestions in server order

        Raises:
            APIError: If request fails
        """
        params: Dict[str, Any] = {"filterType": FilterType(filter_type).value}
        if categories:
            params["categories"] = sorted(categories)
        if search_query:
            params["searchQuery"] = search_query

        response = self._make_request("GET", "api/v1/suggestions", params=params)
        data = self._json(response, "suggestions")

        try:
            return [Suggestion.model_validate(item) for item in data]
        except (ValueError, TypeError) as e:
            raise APIError(f"Failed to parse suggestions response: {str(e)}")

    def get_suggestion(self, suggestion_id: str) -> Suggestion:
        """
        Retrieve a single suggestion by id.

        Raises:
            APIError: If request fails
        """
        response = self._make_request("GET", f"api/v1/suggestions/{suggestion_id}")
        data = self._json(response, "suggestion")

        try:
            return Suggestion.model_validate(data)
        except (ValueError, TypeError) as e:
            raise APIError(f"Failed to parse suggestion response: {str(e)}")

    def get_categories(self) -> List[str]:
        """
        Retrieve the valid suggestion categories.

        Raises:
            APIError: If request fails
        """
        response = self._make_request("GET", "api/v1/suggestions/categories")
        data = self._json(response, "categories")
        if not isinstance(data, list):
            raise APIError("Failed to parse categories response: expected a list")
        return [str(category) for category in data]

    def create_suggestion(
        self,
        title: str,
        description: str,
        category: str,
        submitter: Optional[str]
    ) -> None:
        """
        Create a new suggestion.

        Args:
            title: Suggestion title
            description: Suggestion body
            category: One of the categories from ``get_categories``
            submitter: Display name of the current user

        Raises:
            APIError: If request fails
        """
        new_suggestion = NewSuggestion(
            title=title,
            description=description,
            category=category,
            submitter=submitter
        )
        self._make_request(
            "POST",
            "api/v1/suggestions",
            json_data={"newSuggestion": new_suggestion.model_dump(by_alias=True)}
        )

    def upvote_suggestion(self, suggestion_id: str) -> None:
        """Record an upvote. Raises APIError on failure."""
        self._make_request("POST", f"api/v1/suggestions/{suggestion_id}/upvote")

    def downvote_suggestion(self, suggestion_id: str) -> None:
        """Record a downvote. Raises APIError on failure."""
        self._make_request("POST", f"api/v1/suggestions/{suggestion_id}/downvote")

    def get_comments(self, suggestion_id: str) -> List[Comment]:
        """
        Retrieve the comment thread of a suggestion.

        Raises:
            APIError: If request fails
        """
        response = self._make_request("GET", f"api/v1/suggestions/{suggestion_id}/comments")
        data = self._json(response, "comments")

        try:
            return [Comment.model_validate(item) for item in data]
        except (ValueError, TypeError) as e:
            raise APIError(f"Failed to parse comments response: {str(e)}")

    def add_comment(
        self,
        suggestion_id: str,
        text: str,
        first_name: str,
        last_name: str
    ) -> None:
        """
        Add a comment to a suggestion.

        The submitter is sent both as the joined display name on the comment
        record and as separate first/last name fields.

        Raises:
            APIError: If request fails
        """
        new_comment = NewComment(
            suggestion_id=suggestion_id,
            text=text,
            submitter=f"{first_name} {last_name}"
        )
        self._make_request(
            "POST",
            f"api/v1/suggestions/{suggestion_id}/comments",
            json_data={
                "newComment": new_comment.model_dump(by_alias=True),
                "firstName": first_name,
                "lastName": last_name
            }
        )

    def delete_comment(self, comment_id: str) -> None:
        """Delete a comment. Raises APIError on failure."""
        self._make_request("DELETE", f"api/v1/comments/{comment_id}")

    def get_current_user_name(self) -> str:
        """
        Look up the display name of the current user.

        Raises:
            APIError: If request fails or the payload has no name
        """
        response = self._make_request("GET", "api/v1/users/me")
        data = self._json(response, "user")
        name = data.get("Name") if isinstance(data, dict) else None
        if not name:
            raise APIError("Failed to parse user response: missing Name")
        return name

    def health_check(self) -> Dict[str, Any]:
        """
        Check API health status.

        Raises:
            APIError: If request fails
        """
        response = self._make_request("GET", "health", retries=0)
        return self._json(response, "health")
