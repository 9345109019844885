"""Configuration for UI unit tests."""

from collections.abc import Generator
from unittest.mock import patch

import pytest
import streamlit as st


class FakeSessionState(dict):
    """Dictionary with the attribute access Streamlit's session state offers."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        self[name] = value


@pytest.fixture
def session_state() -> Generator[FakeSessionState, None, None]:
    """Replace st.session_state with a plain dictionary."""
    state = FakeSessionState()
    with patch.object(st, "session_state", state):
        yield state
