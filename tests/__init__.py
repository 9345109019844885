"""
Test suite for the showcase application.

- Unit tests for models, services, UI handlers and the batch CLI
- Integration tests for state persisted across restarts
"""
