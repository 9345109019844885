"""Landing page for the showcase application."""

import streamlit as st

from showcase.config import get_featured_limit
from showcase.services.store import Store
from showcase.ui.components.common import GRID_COLUMNS, render_empty_state, render_header, render_image_card
from showcase.ui.handlers.session import navigate_to


def render_landing_page(store: Store) -> None:
    """Render the public wall of featured artworks."""
    render_header("Discover Amazing Artworks", "Share your creative journey with the world")

    col1, col2, _ = st.columns([1, 1, 4])
    if store.current_user():
        with col1:
            if st.button("🏠 My Dashboard", use_container_width=True, type="primary"):
                navigate_to("dashboard")
    else:
        with col1:
            if st.button("🔑 Login", use_container_width=True):
                navigate_to("login")
        with col2:
            if st.button("✨ Sign Up", use_container_width=True, type="primary"):
                navigate_to("signup")

    # Shuffle once per browser session, not on every rerun
    if "featured_ids" not in st.session_state:
        st.session_state.featured_ids = [image.id for image in store.featured_images(get_featured_limit())]

    images = [image for image in map(store.get_image, st.session_state.featured_ids) if image is not None]

    if not images:
        render_empty_state("No artworks yet", "Be the first to share!", icon="📷")
        return

    columns = st.columns(GRID_COLUMNS)
    for index, image in enumerate(images):
        with columns[index % GRID_COLUMNS]:
            render_image_card(image, show_owner=True)
            if st.button(f"View @{image.owner}", key=f"owner_{image.id}", use_container_width=True):
                navigate_to("profile", profile_username=image.owner)
