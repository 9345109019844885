"""Session-state and Store wiring for the showcase Streamlit app."""

import streamlit as st
import structlog

from showcase.services.store import Store, create_store

logger = structlog.get_logger(__name__)

PAGES = ("landing", "login", "signup", "dashboard", "profile")


@st.cache_resource
def get_store() -> Store:
    """Process-wide Store, built once from configuration."""
    store = create_store()
    for error in store.load_errors:
        logger.warning("store_loaded_with_corrupt_state", key=error.key, reason=error.reason)
    return store


def initialize_session_state(store: Store) -> None:
    """Initialize session state variables."""
    if "current_page" not in st.session_state:
        # A persisted session lands straight on the dashboard
        st.session_state.current_page = "dashboard" if store.current_user() else "landing"

    if "profile_username" not in st.session_state:
        st.session_state.profile_username = None

    if "flash_message" not in st.session_state:
        st.session_state.flash_message = None

    if "pending_delete" not in st.session_state:
        st.session_state.pending_delete = None


def navigate_to(page: str, profile_username: str | None = None) -> None:
    """Switch page and rerun the script."""
    if page not in PAGES:
        logger.warning("unknown_page_requested", page=page)
        page = "landing"

    st.session_state.current_page = page
    if profile_username is not None:
        st.session_state.profile_username = profile_username

    logger.info("navigating_to_page", page=page, profile_username=profile_username)
    st.rerun()
