"""
Unit tests for session-state wiring.
"""

from unittest.mock import patch

import pytest
import streamlit as st

from showcase.error_handling import CorruptStateError
from showcase.services.persistence import InMemoryKeyValueStore
from showcase.services.store import CURRENT_USER_KEY, Store
from showcase.ui.handlers.session import get_store, initialize_session_state, navigate_to


class TestInitializeSessionState:
    """Test cases for initialize_session_state."""

    def test_anonymous_starts_on_landing(self, store, session_state):
        """Test defaults for a visitor."""
        initialize_session_state(store)

        assert session_state.current_page == "landing"
        assert session_state.profile_username is None
        assert session_state.flash_message is None
        assert session_state.pending_delete is None

    def test_restored_session_starts_on_dashboard(self, store, session_state):
        """Test a persisted login lands on the dashboard."""
        store.register_and_login("alice", "a@x.com", "secret1")

        initialize_session_state(store)

        assert session_state.current_page == "dashboard"

    def test_existing_values_are_kept(self, store, session_state):
        """Test reruns do not reset navigation."""
        session_state.current_page = "profile"
        session_state.profile_username = "bob"

        initialize_session_state(store)

        assert session_state.current_page == "profile"
        assert session_state.profile_username == "bob"


class TestNavigateTo:
    """Test cases for navigate_to."""

    @patch.object(st, "rerun")
    def test_navigate(self, mock_rerun, session_state):
        """Test switching page reruns the script."""
        navigate_to("profile", profile_username="alice")

        assert session_state.current_page == "profile"
        assert session_state.profile_username == "alice"
        mock_rerun.assert_called_once()

    @patch.object(st, "rerun")
    def test_unknown_page_goes_to_landing(self, mock_rerun, session_state):
        """Test an unknown page name."""
        navigate_to("admin")

        assert session_state.current_page == "landing"


class TestGetStore:
    """Test cases for get_store."""

    @pytest.fixture(autouse=True)
    def clear_store_cache(self):
        """Drop the cached Store around each test."""
        get_store.clear()
        yield
        get_store.clear()

    def test_builds_configured_store(self):
        """Test the store is built once and reused."""
        first = get_store()

        assert isinstance(first, Store)
        assert get_store() is first

    @patch("showcase.ui.handlers.session.create_store")
    def test_reports_corrupt_state(self, mock_create_store, password_hasher):
        """Test a store loaded from corrupt data is still returned."""
        corrupt = Store(InMemoryKeyValueStore({CURRENT_USER_KEY: "{"}), password_hasher=password_hasher)
        mock_create_store.return_value = corrupt

        store = get_store()

        assert store is corrupt
        assert isinstance(store.load_errors[0], CorruptStateError)
