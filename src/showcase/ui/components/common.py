"""Reusable UI components for the showcase application."""

import html

import streamlit as st
import structlog

from showcase.error_handling import ValidationError
from showcase.models.image import Image
from showcase.services.image_payload import decode_data_url

logger = structlog.get_logger()

GRID_COLUMNS = 3


def render_empty_state(title: str, description: str, icon: str = "🖼️") -> None:
    """
    Render an empty state message.

    Args:
        title: Main title for the empty state
        description: Description text
        icon: Emoji icon to display
    """
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(
            f"""
        <div style='text-align: center; padding: 2rem 0;'>
            <div style='font-size: 4rem; margin-bottom: 1rem;'>{icon}</div>
            <h3 style='color: #666; margin-bottom: 1rem;'>{html.escape(title)}</h3>
            <p style='color: #888;'>{html.escape(description)}</p>
        </div>
        """,
            unsafe_allow_html=True,
        )


def render_error_message(message: str) -> None:
    """Render a form error."""
    st.error(message)


def render_flash_message() -> None:
    """Show and clear the one-shot success message left by a handler."""
    message = st.session_state.get("flash_message")
    if message:
        st.success(message)
        st.session_state.flash_message = None


def render_header(title: str = "Creative Showcase", subtitle: str | None = None) -> None:
    """Render the page header."""
    st.markdown(f"# 📷 {html.escape(title)}")
    if subtitle:
        st.caption(subtitle)
    st.divider()


def render_image(image: Image) -> None:
    """Render an image payload, or a placeholder if it cannot be decoded."""
    try:
        _, data = decode_data_url(image.payload)
    except ValidationError:
        logger.warning("image_payload_unrenderable", image_id=image.id)
        st.warning("Image unavailable")
        return

    st.image(data, caption=image.title, use_container_width=True)


def render_image_card(image: Image, show_owner: bool = False, delete_key: str | None = None) -> bool:
    """
    Render one gallery card.

    Args:
        image: Image to show
        show_owner: Whether to add a "by @owner" line
        delete_key: Widget key for a delete button; no button when None

    Returns:
        bool: True if the delete button was pressed
    """
    with st.container(border=True):
        render_image(image)
        st.markdown(f"**{html.escape(image.title)}**")
        if image.description:
            st.write(image.description)
        if show_owner:
            st.caption(f"by @{image.owner}")
        st.caption(image.get_display_date())

        if delete_key:
            return st.button("🗑️ Delete", key=delete_key, use_container_width=True)

    return False


def render_image_grid(images: list[Image], show_owner: bool = False, deletable: bool = False) -> str | None:
    """
    Render images in a grid.

    Returns:
        str | None: Id of the image whose delete button was pressed
    """
    columns = st.columns(GRID_COLUMNS)
    pressed: str | None = None

    for index, image in enumerate(images):
        with columns[index % GRID_COLUMNS]:
            delete_key = f"delete_{image.id}" if deletable else None
            if render_image_card(image, show_owner=show_owner, delete_key=delete_key):
                pressed = image.id

    return pressed
