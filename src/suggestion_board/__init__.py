"""
Suggestion Board - browse, filter, vote on and comment on suggestions.

This package provides the client view-model, the backend API client and a
Streamlit host page for a suggestion board backed by a remote record API.
"""

__version__ = "1.0.0"
__author__ = "Development Team"
__email__ = "dev@example.com"
