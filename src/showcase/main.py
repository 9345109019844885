"""
Main Streamlit application for showcase.

Run with ``streamlit run src/showcase/main.py``.
"""

import streamlit as st
from streamlit.runtime.scriptrunner_utils.exceptions import RerunException, StopException

from showcase.config import get_debug_mode
from showcase.error_handling import describe_error
from showcase.logging_config import configure_structured_logging, get_logger
from showcase.ui.handlers.session import get_store, initialize_session_state
from showcase.ui.pages.dashboard import render_dashboard_page
from showcase.ui.pages.landing import render_landing_page
from showcase.ui.pages.login import render_login_page
from showcase.ui.pages.profile import render_profile_page
from showcase.ui.pages.signup import render_signup_page

configure_structured_logging()
logger = get_logger(__name__)

PAGE_RENDERERS = {
    "landing": render_landing_page,
    "login": render_login_page,
    "signup": render_signup_page,
    "dashboard": render_dashboard_page,
    "profile": render_profile_page,
}


def main() -> None:
    """Main application entry point."""
    st.set_page_config(
        page_title="Creative Showcase",
        page_icon="📷",
        layout="wide",
        menu_items={"About": "Creative Showcase - share your artworks"},
    )

    try:
        store = get_store()
        initialize_session_state(store)

        current_page = st.session_state.current_page
        renderer = PAGE_RENDERERS.get(current_page, render_landing_page)
        renderer(store)

        if get_debug_mode():
            with st.expander("Debug Info"):
                st.write({"current_user": store.current_user(), "current_page": current_page})

    except (RerunException, StopException):
        raise
    except Exception as e:
        error_info = describe_error(e)
        logger.error("critical_application_error", **error_info.to_dict())
        st.error(error_info.user_message)

        if st.button("🔄 Reload", type="primary"):
            st.rerun()


if __name__ == "__main__":
    main()
