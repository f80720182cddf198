"""Pytest configuration and fixtures for config package tests."""

import os
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp = tempfile.mkdtemp()
    yield Path(temp)
    shutil.rmtree(temp)


@pytest.fixture
def sample_config_dict():
    """Sample loader configuration dictionary."""
    return {
        "loader": [
            {
                "name": "strict",
                "strict_formats": True,
                "formats": ["email", "date-time"],
            },
            {
                "name": "lenient",
                "strict_formats": False,
            },
        ],
        "registry": {
            "name": "custom",
            "formats": ["hostname"],
        },
    }


@pytest.fixture
def env_vars(monkeypatch):
    """Helper to set environment variables."""

    def _set_env(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key, str(value))

    return _set_env


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Clear all SCHEMAKNOBS_ environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("SCHEMAKNOBS_"):
            monkeypatch.delenv(key)
