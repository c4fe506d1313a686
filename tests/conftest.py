"""
Test configuration and fixtures for the Page Audit Engine.

Logging to file is switched off before the app is imported so test runs
don't leave a logs/ directory behind.
"""

import os
from typing import Generator

os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("ENVIRONMENT", "local")

import pytest
from fastapi.testclient import TestClient

from pageaudit.features.analysis.schemas.node import Node


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from pageaudit.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    This fixture provides a clean TestClient instance for each test function,
    ensuring proper isolation between tests.
    """
    with TestClient(test_app) as test_client:
        yield test_client


@pytest.fixture
def well_formed_page():
    """A small page that satisfies the head-level metadata rules."""
    return [
        Node(id="html-lang", name="html-lang", metadata={"lang": "en"}),
        Node(id="title", name="title", type="meta", text="Handmade ceramics from a Lisbon pottery studio"),
        Node(
            id="meta-description",
            name="meta-description",
            metadata={
                "name": "description",
                "content": (
                    "Handmade ceramics thrown and glazed in our Lisbon studio. Browse mugs, bowls "
                    "and vases, each piece one of a kind and shipped across Europe."
                ),
            },
        ),
        Node(
            id="meta-viewport",
            name="meta-viewport",
            metadata={"name": "viewport", "content": "width=device-width, initial-scale=1"},
        ),
        Node(id="meta-robots", name="meta-robots", metadata={"name": "robots", "content": "index, follow"}),
        Node(id="canonical", name="link-canonical", rel="canonical", href="https://ceramics.pt/"),
        Node(id="favicon", name="favicon", rel="icon", href="/favicon.ico"),
    ]
