"""API client module for the suggestion backend."""

from .client import APIError, SuggestionAPIClient

__all__ = ["APIError", "SuggestionAPIClient"]
