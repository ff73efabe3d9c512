"""Pytest configuration and fixtures for integration tests.

Integration tests call the live Gemini API. They are skipped unless a real
GEMINI_API_KEY is available from the environment or the project .env file.
"""

import base64
import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Placeholder key set by tests/conftest.py for unit tests
DUMMY_API_KEY = "test-gemini-key"

PROJECT_ROOT = Path(__file__).parent.parent.parent


def pytest_configure(config):
    """Load .env from the project root before tests are collected."""
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)

    print("\n" + "=" * 70)
    print("Note: Integration tests require a valid GEMINI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip integration tests when no real Gemini key is configured."""
    gemini_key = os.getenv("GEMINI_API_KEY")
    if not gemini_key or gemini_key == DUMMY_API_KEY:
        pytest.skip(
            "Integration tests skipped. Missing API keys: GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )


@pytest.fixture(scope="session")
def fridge_image() -> str:
    """Base64-encoded sample fridge photo from images/.

    Tests needing a real photo are skipped when none is present.
    """
    images_dir = PROJECT_ROOT / "images"
    for name in ("fridge.jpg", "fresh_vegetables.jpg", "fridge.png"):
        image_path = images_dir / name
        if image_path.exists():
            return base64.b64encode(image_path.read_bytes()).decode("utf-8")
    pytest.skip("No test images found in images/ directory")
