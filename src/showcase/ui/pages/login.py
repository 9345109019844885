"""Login page for the showcase application."""

import streamlit as st

from showcase.services.store import Store
from showcase.ui.components.common import render_error_message, render_header
from showcase.ui.handlers.auth import handle_login
from showcase.ui.handlers.session import navigate_to


def render_login_page(store: Store) -> None:
    """Render the login form."""
    render_header("Welcome Back", "Log in to manage your artworks")

    with st.form("login_form"):
        username = st.text_input("Username", placeholder="johndoe")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", type="primary", use_container_width=True)

    if submitted:
        error = handle_login(store, username, password)
        if error:
            render_error_message(error)
        else:
            navigate_to("dashboard")

    if st.button("Don't have an account? Sign Up"):
        navigate_to("signup")
    if st.button("← Back to gallery"):
        navigate_to("landing")
