"""
Board module: view state, pagination and the event controller.
"""

from .controller import SuggestionBoard
from .pagination import PaginationState
from .state import BoardState

__all__ = ["SuggestionBoard", "PaginationState", "BoardState"]
