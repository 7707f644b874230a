"""
Streamlit host page for the suggestion board.

The page keeps one ``SuggestionBoard`` per session and turns widget events
into board actions. Run with::

    streamlit run src/suggestion_board/main.py
"""

import streamlit as st
from loguru import logger

from suggestion_board.api import SuggestionAPIClient
from suggestion_board.board import SuggestionBoard
from suggestion_board.config import get_settings
from suggestion_board.models import FilterType
from suggestion_board.utils.logging import setup_logging


def setup_page_config() -> None:
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title="Suggestion Board",
        page_icon="💡",
        layout="wide",
        initial_sidebar_state="expanded"
    )


@st.cache_resource
def get_api_client() -> SuggestionAPIClient:
    """Get or create API client instance (cached)."""
    settings = get_settings()
    return SuggestionAPIClient(
        base_url=settings.suggestion_api_base_url,
        timeout=settings.api_timeout
    )


def initialize_session_state() -> None:
    """Create and load the board once per session."""
    if 'board' not in st.session_state:
        board = SuggestionBoard(get_api_client())
        board.load()
        st.session_state.board = board
        logger.info(f"Board loaded for user: {board.state.user_name}")


def render_sidebar(board: SuggestionBoard) -> None:
    """Render search, filter type and category controls."""
    state = board.state
    st.sidebar.title("💡 Suggestion Board")

    # API Status
    st.sidebar.markdown("### 🔗 Connection Status")
    if board.check_health()["status"] == "healthy":
        st.sidebar.success("✅ API Connected")
    else:
        st.sidebar.error("❌ API Error")

    st.sidebar.text_input(
        "Search",
        value=state.filters.search_query,
        key="search_query",
        on_change=lambda: board.search(st.session_state.search_query)
    )

    st.sidebar.markdown("### Show")
    for label, handler, filter_type in (
        ("All Suggestions", board.filter_all, FilterType.ALL),
        ("Recent Suggestions", board.filter_recent, FilterType.RECENT),
        ("Highest Ranked", board.filter_highest_ranked, FilterType.HIGHEST_RANKED),
    ):
        st.sidebar.button(
            label,
            on_click=handler,
            type="primary" if state.filters.filter_type == filter_type else "secondary"
        )

    st.sidebar.markdown("### Categories")
    for category in state.categories:
        key = f"category_{category}"
        st.sidebar.checkbox(
            category,
            value=category in state.filters.selected_categories,
            key=key,
            on_change=lambda c=category, k=key: board.toggle_category(c, st.session_state[k])
        )
    st.sidebar.button("Apply Filter", on_click=board.apply_category_filter)

    options = list(board.settings.page_size_options)
    page_size = state.pagination.page_size
    st.sidebar.selectbox(
        "Suggestions per page",
        options=options,
        index=options.index(page_size) if page_size in options else 0,
        key="page_size",
        on_change=lambda: board.set_page_size(st.session_state.page_size)
    )


def render_create_form(board: SuggestionBoard) -> None:
    """Render the new-suggestion modal."""
    state = board.state
    with st.form("create_suggestion"):
        st.subheader("New Suggestion")
        title = st.text_input("Title", value=state.suggestion_draft.title)
        description = st.text_area("Description", value=state.suggestion_draft.description)
        category = st.selectbox("Category", options=list(state.categories) or [""])
        col1, col2 = st.columns(2)
        submitted = col1.form_submit_button("Submit")
        cancelled = col2.form_submit_button("Cancel")

    if submitted:
        board.update_suggestion_draft(title=title, description=description, category=category or "")
        board.submit_suggestion()
        st.rerun()
    elif cancelled:
        board.hide_create_modal()
        st.rerun()


def render_comment_form(board: SuggestionBoard) -> None:
    """Render the add-comment modal."""
    draft = board.state.comment_draft
    with st.form("add_comment"):
        st.subheader("Add Comment")
        text = st.text_area("Comment", value=draft.text)
        col1, col2 = st.columns(2)
        first_name = col1.text_input("First Name", value=draft.first_name)
        last_name = col2.text_input("Last Name", value=draft.last_name)
        submitted = col1.form_submit_button("Submit")
        cancelled = col2.form_submit_button("Cancel")

    if submitted:
        board.update_comment_draft(text=text, first_name=first_name, last_name=last_name)
        board.submit_comment()
        st.rerun()
    elif cancelled:
        board.hide_comment_modal()
        st.rerun()


def render_detail(board: SuggestionBoard) -> None:
    """Render the detail modal for the selected suggestion."""
    detail = board.detail_row()
    if detail is None:
        return

    with st.container(border=True):
        st.subheader(detail['title'])
        st.caption(f"{detail['category']} · {detail['submitter']} · {detail['submitted']}")
        st.write(detail['description'])

        col1, col2, col3 = st.columns([1, 1, 4])
        col1.button(f"👍 {detail['upvotes']}", key="detail_up",
                    on_click=board.upvote, args=(detail['id'],))
        col2.button(f"👎 {detail['downvotes']}", key="detail_down",
                    on_click=board.downvote, args=(detail['id'],))
        col3.button("Close", key="detail_close", on_click=board.hide_detail_modal)

        st.markdown("#### Comments")
        for row in board.comment_rows():
            c1, c2 = st.columns([6, 1])
            c1.markdown(f"**{row['submitter']}** · {row['posted']}  \n{row['text']}")
            c2.button("Delete", key=f"detail_delete_{row['id']}",
                      on_click=board.delete_comment, args=(row['id'],))


def render_suggestions(board: SuggestionBoard) -> None:
    """Render the current page of suggestions and the pager."""
    rows = board.suggestion_rows()
    if not rows:
        st.info("No suggestions match the current filters")

    for row, suggestion in zip(rows, board.visible_suggestions):
        with st.container(border=True):
            st.button(row['title'], key=f"open_{row['id']}",
                      on_click=board.open_suggestion, args=(row['id'],))
            st.caption(f"{row['category']} · {row['submitter']} · {row['submitted']}")
            st.write(row['description'])
            col1, col2, col3 = st.columns([1, 1, 4])
            col1.button(f"👍 {row['upvotes']}", key=f"up_{row['id']}",
                        on_click=board.upvote, args=(row['id'],))
            col2.button(f"👎 {row['downvotes']}", key=f"down_{row['id']}",
                        on_click=board.downvote, args=(row['id'],))
            col3.button("Comment", key=f"comment_{row['id']}",
                        on_click=board.show_comment_modal, args=(row['id'],))

            for comment in board.comment_rows(suggestion.comments):
                c1, c2 = st.columns([6, 1])
                c1.markdown(f"**{comment['submitter']}** · {comment['posted']}  \n{comment['text']}")
                c2.button("Delete", key=f"delete_{comment['id']}",
                          on_click=board.delete_comment, args=(comment['id'],))

    pagination = board.state.pagination
    col1, col2, col3 = st.columns([1, 2, 1])
    col1.button("Previous", on_click=board.previous_page, disabled=pagination.is_first_page)
    col2.markdown(f"Page {pagination.current_page} of {max(pagination.total_pages, 1)}")
    col3.button("Next", on_click=board.next_page, disabled=pagination.is_last_page)


def main() -> None:
    """Main suggestion board page."""
    setup_page_config()
    setup_logging()
    initialize_session_state()

    board: SuggestionBoard = st.session_state.board

    st.title("💡 Suggestion Board")
    if board.state.user_name:
        st.markdown(f"Signed in as **{board.state.user_name}**")

    render_sidebar(board)

    st.button("New Suggestion", on_click=board.show_create_modal)

    modals = board.state.modals
    if modals.create_open:
        render_create_form(board)
    if modals.comment_open:
        render_comment_form(board)
    if modals.detail_open:
        render_detail(board)

    render_suggestions(board)


if __name__ == "__main__":
    main()
