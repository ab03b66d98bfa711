"""
Pytest configuration and shared fixtures for the Evolutio project.

This module provides fixtures for:
- API client setup
"""
import pytest
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    """Return an API client (the engine API needs no authentication)."""
    return APIClient()
