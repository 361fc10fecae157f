"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Mock settings/configuration
- Sample header blocks
- Diagnostic collections
- Charset backends
"""

import io
import os

import pytest

from eml_headers.config import Settings
from eml_headers.models.diagnostics import DiagnosticLog
from eml_headers.parsing.charsets import CodecsCharsetBackend
from eml_headers.parsing.codec import HeaderCodec
from tests.fixtures.headers import SAMPLE_HEADERS


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create mock settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="INFO",
        log_json=False,  # Easier to read in tests
        target_charset="UTF-8",
        detect_unknown_charsets=False,
        trace_decoding=False,
    )


@pytest.fixture
def diagnostics() -> DiagnosticLog:
    """
    Fresh diagnostic log for a single parse.

    Returns:
        Empty DiagnosticLog
    """
    return DiagnosticLog()


@pytest.fixture
def backend() -> CodecsCharsetBackend:
    """Default charset backend."""
    return CodecsCharsetBackend()


@pytest.fixture
def codec(mock_settings) -> HeaderCodec:
    """HeaderCodec built from test settings."""
    return HeaderCodec.from_settings(mock_settings)


@pytest.fixture
def continuation_stream() -> io.BytesIO:
    """
    Get header block mixing folded, non-folded and new-field lines.

    Returns:
        BytesIO positioned at the start of the headers
    """
    return io.BytesIO(SAMPLE_HEADERS["continuation"])


@pytest.fixture
def encoded_stream() -> io.BytesIO:
    """
    Get header block with encoded-words in several charsets.

    Returns:
        BytesIO positioned at the start of the headers
    """
    return io.BytesIO(SAMPLE_HEADERS["encoded"])


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "slow: Slow tests that may take longer to run"
    )
