"""Pytest configuration and fixtures for ethserver tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear ethserver environment variables before each test."""
    for key in list(os.environ.keys()):
        if key.startswith("ETHSERVER_"):
            monkeypatch.delenv(key, raising=False)
