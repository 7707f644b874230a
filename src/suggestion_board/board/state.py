"""
Immutable view state for the suggestion board.

Every user action maps to a pure function that takes a ``BoardState`` and
returns a new one. Nothing here talks to the backend; the controller issues
the remote calls and folds their results back in with these functions.
"""

from typing import FrozenSet, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..models import Comment, FilterType, Suggestion
from .pagination import PaginationState, paginate


class FilterState(BaseModel):
    """
    Filter and search inputs.

    ``selected_categories`` tracks the checkboxes; it only reaches the
    backend once copied into ``applied_categories``.
    """

    model_config = ConfigDict(frozen=True)

    filter_type: FilterType = FilterType.ALL
    selected_categories: FrozenSet[str] = frozenset()
    applied_categories: FrozenSet[str] = frozenset()
    search_query: str = ""


class ModalState(BaseModel):
    """Visibility of the three modals. Each flag is independent."""

    model_config = ConfigDict(frozen=True)

    create_open: bool = False
    comment_open: bool = False
    detail_open: bool = False


class SuggestionDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    category: str = ""


class CommentDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    suggestion_id: Optional[str] = None
    text: str = ""
    first_name: str = ""
    last_name: str = ""


class BoardState(BaseModel):
    """Complete view-model of the suggestion board."""

    model_config = ConfigDict(frozen=True)

    suggestions: Tuple[Suggestion, ...] = ()
    categories: Tuple[str, ...] = ()
    filters: FilterState = Field(default_factory=FilterState)
    pagination: PaginationState = Field(default_factory=PaginationState)
    modals: ModalState = Field(default_factory=ModalState)
    suggestion_draft: SuggestionDraft = Field(default_factory=SuggestionDraft)
    comment_draft: CommentDraft = Field(default_factory=CommentDraft)
    detail_suggestion: Optional[Suggestion] = None
    detail_comments: Tuple[Comment, ...] = ()
    user_name: Optional[str] = None
    # Token of the most recently issued list fetch
    request_token: int = 0


def initial_state(page_size: int = 5) -> BoardState:
    return BoardState(pagination=PaginationState(page_size=page_size))


def _with_filters(state: BoardState, **changes) -> BoardState:
    return state.model_copy(update={"filters": state.filters.model_copy(update=changes)})


def _with_modals(state: BoardState, **changes) -> BoardState:
    return state.model_copy(update={"modals": state.modals.model_copy(update=changes)})


# ---------------------------------------------------------------------------
# Loaded data
# ---------------------------------------------------------------------------

def set_user_name(state: BoardState, user_name: str) -> BoardState:
    return state.model_copy(update={"user_name": user_name})


def set_categories(state: BoardState, categories: Iterable[str]) -> BoardState:
    return state.model_copy(update={"categories": tuple(categories)})


def begin_suggestions_request(state: BoardState) -> Tuple[BoardState, int]:
    """
    Issue a token for a new list fetch.

    Returns:
        Tuple of the new state and the token to pass to ``receive_suggestions``
    """
    token = state.request_token + 1
    return state.model_copy(update={"request_token": token}), token


def receive_suggestions(
    state: BoardState,
    token: int,
    suggestions: Iterable[Suggestion]
) -> BoardState:
    """
    Replace the suggestion list with a fetch result.

    Results carrying anything but the latest token are stale and dropped, so
    a slow response can never overwrite a fresher one. Accepted results reset
    pagination to page 1 and start every suggestion with no loaded comments.
    """
    if token != state.request_token:
        return state

    fresh = tuple(s.model_copy(update={"comments": ()}) for s in suggestions)
    return state.model_copy(update={
        "suggestions": fresh,
        "pagination": state.pagination.with_item_count(len(fresh)),
    })


def find_suggestion(state: BoardState, suggestion_id: str) -> Optional[Suggestion]:
    return next((s for s in state.suggestions if s.id == suggestion_id), None)


def replace_suggestion(state: BoardState, suggestion: Suggestion) -> BoardState:
    """
    Swap in a refetched copy of one suggestion.

    Comments already loaded for it are kept. The detail view is updated when
    it shows the same suggestion.
    """
    suggestions = []
    for current in state.suggestions:
        if current.id == suggestion.id:
            current = suggestion.model_copy(update={"comments": current.comments})
        suggestions.append(current)

    changes = {"suggestions": tuple(suggestions)}
    detail = state.detail_suggestion
    if detail is not None and detail.id == suggestion.id:
        changes["detail_suggestion"] = suggestion.model_copy(update={"comments": detail.comments})
    return state.model_copy(update=changes)


def set_comments(
    state: BoardState,
    suggestion_id: str,
    comments: Iterable[Comment]
) -> BoardState:
    """Replace the loaded comment thread of one suggestion."""
    comments = tuple(comments)
    suggestions = tuple(
        s.model_copy(update={"comments": comments}) if s.id == suggestion_id else s
        for s in state.suggestions
    )

    changes = {"suggestions": suggestions}
    detail = state.detail_suggestion
    if detail is not None and detail.id == suggestion_id:
        changes["detail_suggestion"] = detail.model_copy(update={"comments": comments})
        changes["detail_comments"] = comments
    return state.model_copy(update=changes)


def _drop_first(comments: Tuple[Comment, ...], comment_id: str) -> Tuple[Comment, ...]:
    for index, comment in enumerate(comments):
        if comment.id == comment_id:
            return comments[:index] + comments[index + 1:]
    return comments


def remove_comment(state: BoardState, comment_id: str) -> BoardState:
    """
    Remove a deleted comment from its owning suggestion.

    Only the first entry with ``comment_id`` goes; every other comment is
    left as it was. The detail thread is patched the same way.
    """
    suggestions = list(state.suggestions)
    for index, suggestion in enumerate(suggestions):
        remaining = _drop_first(suggestion.comments, comment_id)
        if remaining is not suggestion.comments:
            suggestions[index] = suggestion.model_copy(update={"comments": remaining})
            break

    changes = {
        "suggestions": tuple(suggestions),
        "detail_comments": _drop_first(state.detail_comments, comment_id),
    }
    detail = state.detail_suggestion
    if detail is not None:
        changes["detail_suggestion"] = detail.model_copy(
            update={"comments": _drop_first(detail.comments, comment_id)}
        )
    return state.model_copy(update=changes)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

def visible_suggestions(state: BoardState) -> Tuple[Suggestion, ...]:
    """Suggestions on the current page."""
    return paginate(state.suggestions, state.pagination.current_page, state.pagination.page_size)


def set_page_size(state: BoardState, page_size: int) -> BoardState:
    pagination = state.pagination.with_page_size(page_size, len(state.suggestions))
    return state.model_copy(update={"pagination": pagination})


def next_page(state: BoardState) -> BoardState:
    pagination = state.pagination.next_page()
    if pagination is state.pagination:
        return state
    return state.model_copy(update={"pagination": pagination})


def previous_page(state: BoardState) -> BoardState:
    pagination = state.pagination.previous_page()
    if pagination is state.pagination:
        return state
    return state.model_copy(update={"pagination": pagination})


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def set_search_query(state: BoardState, search_query: str) -> BoardState:
    return _with_filters(state, search_query=search_query)


def set_filter_type(state: BoardState, filter_type: FilterType) -> BoardState:
    return _with_filters(state, filter_type=FilterType(filter_type))


def toggle_category(state: BoardState, category: str, checked: bool) -> BoardState:
    """Tick or untick a category checkbox without applying it."""
    selected = state.filters.selected_categories
    selected = selected | {category} if checked else selected - {category}
    return _with_filters(state, selected_categories=frozenset(selected))


def apply_category_filter(state: BoardState) -> BoardState:
    return _with_filters(state, applied_categories=state.filters.selected_categories)


# ---------------------------------------------------------------------------
# Modals and forms
# ---------------------------------------------------------------------------

def show_create_modal(state: BoardState) -> BoardState:
    return _with_modals(state, create_open=True)


def hide_create_modal(state: BoardState) -> BoardState:
    return _with_modals(state, create_open=False)


def show_comment_modal(state: BoardState, suggestion_id: str) -> BoardState:
    draft = state.comment_draft.model_copy(update={"suggestion_id": suggestion_id})
    state = state.model_copy(update={"comment_draft": draft})
    return _with_modals(state, comment_open=True)


def hide_comment_modal(state: BoardState) -> BoardState:
    return _with_modals(state, comment_open=False)


def show_detail_modal(state: BoardState) -> BoardState:
    return _with_modals(state, detail_open=True)


def hide_detail_modal(state: BoardState) -> BoardState:
    return _with_modals(state, detail_open=False)


def open_detail(state: BoardState, suggestion_id: str) -> BoardState:
    """
    Show a suggestion in the detail modal.

    Unknown ids leave the state untouched.
    """
    suggestion = find_suggestion(state, suggestion_id)
    if suggestion is None:
        return state
    state = state.model_copy(update={
        "detail_suggestion": suggestion,
        "detail_comments": suggestion.comments,
    })
    return show_detail_modal(state)


def update_suggestion_draft(state: BoardState, **fields) -> BoardState:
    draft = state.suggestion_draft.model_copy(update=fields)
    return state.model_copy(update={"suggestion_draft": draft})


def reset_suggestion_draft(state: BoardState) -> BoardState:
    return state.model_copy(update={"suggestion_draft": SuggestionDraft()})


def update_comment_draft(state: BoardState, **fields) -> BoardState:
    draft = state.comment_draft.model_copy(update=fields)
    return state.model_copy(update={"comment_draft": draft})


def reset_comment_draft(state: BoardState) -> BoardState:
    """Clear the comment form, keeping the suggestion it targets."""
    draft = CommentDraft(suggestion_id=state.comment_draft.suggestion_id)
    return state.model_copy(update={"comment_draft": draft})
