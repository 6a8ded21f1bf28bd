"""
Pytest configuration and fixtures for docsplit tests
"""
import pytest

from docsplit.logging_config import GlobalIndent


@pytest.fixture(autouse=True)
def reset_indent():
    """Start every test with a flat log indentation"""
    GlobalIndent.reset()
    yield
    GlobalIndent.reset()
