"""Public profile page for the showcase application."""

import streamlit as st

from showcase.services.store import Store
from showcase.ui.components.common import render_empty_state, render_header, render_image_grid
from showcase.ui.handlers.gallery import load_gallery
from showcase.ui.handlers.session import navigate_to


def render_profile_page(store: Store) -> None:
    """Render another user's public gallery."""
    username = st.session_state.get("profile_username")
    if not username:
        navigate_to("landing")
        return

    user = store.get_user(username)
    initial = user.get_initial() if user else username[:1].upper()
    render_header(f"@{username}", f"Avatar: {initial}")

    col1, col2, _ = st.columns([1, 1, 4])
    with col1:
        if st.button("← Gallery", use_container_width=True):
            navigate_to("landing")
    if store.current_user():
        with col2:
            if st.button("🏠 My Dashboard", use_container_width=True):
                navigate_to("dashboard")

    images = load_gallery(store, username)
    st.markdown(f"**{len(images)}** artworks")

    if not images:
        render_empty_state("No artworks yet", f"@{username} hasn't shared anything yet.")
        return

    render_image_grid(images)
