"""Gallery handlers for the showcase application."""

import streamlit as st
import structlog

from showcase.error_handling import ShowcaseError
from showcase.models.image import Image, sort_by_recency
from showcase.services.store import DeleteResult, Store

logger = structlog.get_logger(__name__)

DELETE_MESSAGES = {
    DeleteResult.FORBIDDEN: "You can only delete your own images.",
    DeleteResult.NOT_FOUND: "That image was already deleted.",
}


def load_gallery(store: Store, username: str) -> list[Image]:
    """A user's images, newest first."""
    return sort_by_recency(store.images_by_owner(username))


def handle_upload(
    store: Store,
    owner: str,
    file_data: bytes | None,
    title: str,
    description: str = "",
) -> str | None:
    """
    Upload an image for ``owner``.

    Args:
        store: Gallery store
        owner: Uploading username
        file_data: Raw bytes from the file picker
        title: Image title
        description: Optional description

    Returns:
        str | None: Error message to display, or None on success
    """
    try:
        image = store.upload_image(owner, file_data, title, description)
    except ShowcaseError as e:
        return e.user_message

    st.session_state.flash_message = f"Uploaded '{image.title}'"
    return None


def handle_delete(store: Store, image_id: str, owner: str) -> str | None:
    """
    Delete one of ``owner``'s images.

    Returns:
        str | None: Error message to display, or None on success
    """
    try:
        result = store.delete_image(image_id, owner)
    except ShowcaseError as e:
        return e.user_message

    if not result:
        logger.info("image_delete_refused", image_id=image_id, username=owner, result=result.value)
        return DELETE_MESSAGES[result]

    st.session_state.flash_message = "Image deleted"
    return None


def request_delete(image_id: str) -> None:
    """Mark an image for deletion; nothing is removed until confirmed."""
    st.session_state.pending_delete = image_id


def cancel_delete() -> None:
    """Forget a pending delete request."""
    st.session_state.pending_delete = None


def confirm_delete(store: Store, owner: str) -> str | None:
    """
    Delete the image marked by ``request_delete``.

    Returns:
        str | None: Error message to display, or None on success or when nothing is pending
    """
    image_id = st.session_state.get("pending_delete")
    st.session_state.pending_delete = None
    if not image_id:
        return None

    return handle_delete(store, image_id, owner)
