"""Authentication handlers for the showcase application.

Handlers return None on success or a message to show the user; they never
render anything themselves.
"""

import streamlit as st
import structlog

from showcase.error_handling import ShowcaseError, describe_error
from showcase.services.store import Store

logger = structlog.get_logger(__name__)


def handle_signup(store: Store, username: str, email: str, password: str, confirm_password: str) -> str | None:
    """
    Register an account and log it in.

    Args:
        store: Gallery store
        username: Requested username
        email: Contact email
        password: Password
        confirm_password: Password typed a second time

    Returns:
        str | None: Error message to display, or None on success
    """
    if password != confirm_password:
        return "Passwords do not match"

    if not username or not email or not password:
        return "Please fill all fields"

    try:
        store.register_and_login(username.strip(), email, password)
    except ShowcaseError as e:
        return e.user_message

    st.session_state.flash_message = f"Welcome, @{username.strip()}!"
    logger.info("signup_completed", username=username.strip())
    return None


def handle_login(store: Store, username: str, password: str) -> str | None:
    """
    Log a user in.

    Returns:
        str | None: Error message to display, or None on success
    """
    if not username or not password:
        return "Please fill all fields"

    try:
        store.authenticate(username.strip(), password)
    except ShowcaseError as e:
        return e.user_message

    return None


def handle_logout(store: Store) -> None:
    """End the current session and clear page state."""
    try:
        store.end_session()
    except ShowcaseError as e:
        logger.error("logout_failed", error=describe_error(e).to_dict())
        st.session_state.flash_message = e.user_message

    st.session_state.current_page = "landing"
    st.session_state.profile_username = None
    st.session_state.pending_delete = None
