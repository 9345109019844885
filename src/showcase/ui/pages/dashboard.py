"""Private dashboard page for the showcase application."""

import streamlit as st

from showcase.services.store import Store
from showcase.ui.components.common import (
    render_empty_state,
    render_error_message,
    render_flash_message,
    render_header,
    render_image_grid,
)
from showcase.ui.handlers.auth import handle_logout
from showcase.ui.handlers.gallery import cancel_delete, confirm_delete, handle_upload, load_gallery, request_delete
from showcase.ui.handlers.session import navigate_to

UPLOAD_TYPES = ["png", "jpg", "jpeg", "gif", "webp"]


def render_upload_form(store: Store, username: str) -> None:
    """Render the upload form and process a submission."""
    with st.expander("📤 Upload New Artwork", expanded=False):
        with st.form("upload_form", clear_on_submit=True):
            title = st.text_input("Title", placeholder="My Artwork")
            description = st.text_area("Description", placeholder="Tell us about your artwork...")
            uploaded_file = st.file_uploader("Image", type=UPLOAD_TYPES)
            submitted = st.form_submit_button("Upload", type="primary")

        if submitted:
            file_data = uploaded_file.getvalue() if uploaded_file is not None else None
            error = handle_upload(store, username, file_data, title, description)
            if error:
                render_error_message(error)
            else:
                st.rerun()


def render_delete_confirmation(store: Store, username: str) -> None:
    """Ask before deleting the image whose delete button was pressed."""
    image_id = st.session_state.get("pending_delete")
    if not image_id:
        return

    image = store.get_image(image_id)
    title = image.title if image else "this image"
    st.warning(f"Are you sure you want to delete '{title}'?")

    col1, col2, _ = st.columns([1, 1, 4])
    with col1:
        if st.button("Delete", key="confirm_delete", type="primary", use_container_width=True):
            error = confirm_delete(store, username)
            if error:
                render_error_message(error)
            else:
                st.rerun()
    with col2:
        if st.button("Cancel", key="cancel_delete", use_container_width=True):
            cancel_delete()
            st.rerun()


def render_dashboard_page(store: Store) -> None:
    """Render the logged-in user's own gallery."""
    username = store.current_user()
    if not username:
        navigate_to("login")
        return

    render_header(f"@{username}", "Your private dashboard")
    render_flash_message()

    col1, col2, _ = st.columns([1, 1, 4])
    with col1:
        if st.button("🌐 Public Profile", use_container_width=True):
            navigate_to("profile", profile_username=username)
    with col2:
        if st.button("🚪 Logout", use_container_width=True):
            handle_logout(store)
            st.rerun()

    render_upload_form(store, username)

    images = load_gallery(store, username)
    if not images:
        render_empty_state("No artworks yet", "Upload your first artwork to get started.")
        return

    render_delete_confirmation(store, username)

    delete_id = render_image_grid(images, deletable=True)
    if delete_id:
        request_delete(delete_id)
        st.rerun()
