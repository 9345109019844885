"""Sign-up page for the showcase application."""

import streamlit as st

from showcase.services.store import MIN_PASSWORD_LENGTH, Store
from showcase.ui.components.common import render_error_message, render_header
from showcase.ui.handlers.auth import handle_signup
from showcase.ui.handlers.session import navigate_to


def render_signup_page(store: Store) -> None:
    """Render the account creation form."""
    render_header("Create Account", "Join our creative community")

    with st.form("signup_form"):
        username = st.text_input("Username", placeholder="johndoe")
        email = st.text_input("Email", placeholder="john@example.com")
        password = st.text_input("Password", type="password", help=f"At least {MIN_PASSWORD_LENGTH} characters")
        confirm_password = st.text_input("Confirm Password", type="password")
        submitted = st.form_submit_button("Sign Up", type="primary", use_container_width=True)

    if submitted:
        error = handle_signup(store, username, email, password, confirm_password)
        if error:
            render_error_message(error)
        else:
            navigate_to("dashboard")

    if st.button("Already have an account? Login"):
        navigate_to("login")
    if st.button("← Back to gallery"):
        navigate_to("landing")
