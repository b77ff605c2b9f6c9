"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Settings/configuration
- Sample email data
- Temporary files
"""

import os
from typing import Generator

import pytest

from eml_decoder.config import Settings
from tests.fixtures.emails import SAMPLE_EMAILS


@pytest.fixture
def lenient_settings() -> Settings:
    """
    Settings that replace undecodable charset bytes instead of failing.

    Returns:
        Settings instance with charset_errors="replace"
    """
    return Settings(_env_file=None, charset_errors="replace")


@pytest.fixture
def sample_eml_bytes() -> bytes:
    """
    Get simple plain text email bytes for basic tests.

    Returns:
        bytes of a simple .eml file
    """
    return SAMPLE_EMAILS["simple_plain_text"]


@pytest.fixture
def multipart_alternative_eml() -> bytes:
    """
    Get multipart email with ISO-2022-JP text and base64 HTML.

    Returns:
        bytes of multipart/alternative email
    """
    return SAMPLE_EMAILS["multipart_alternative"]


@pytest.fixture
def nested_multipart_eml() -> bytes:
    """
    Get multipart/mixed email nesting a multipart/alternative.

    Returns:
        bytes of nested multipart email
    """
    return SAMPLE_EMAILS["nested_multipart"]


@pytest.fixture
def tmp_eml_file(tmp_path) -> Generator[str, None, None]:
    """
    Create temporary .eml file for file-based tests.

    Args:
        tmp_path: pytest's temporary directory fixture

    Yields:
        Path to temporary .eml file
    """
    eml_path = tmp_path / "test_email.eml"
    eml_path.write_bytes(SAMPLE_EMAILS["simple_plain_text"])
    yield str(eml_path)
    # Cleanup is automatic with tmp_path


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
