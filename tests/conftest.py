"""Shared pytest configuration.

Provides a dummy GEMINI_API_KEY so client creation passes validation in unit
tests; every unit test mocks the Gemini client itself. A real key from the
environment or .env takes precedence (integration tests need it).
"""

import os

import pytest
from dotenv import load_dotenv

DUMMY_API_KEY = "test-gemini-key"

load_dotenv()
os.environ.setdefault("GEMINI_API_KEY", DUMMY_API_KEY)

from fridge_chef.models.models import TasteProfile  # noqa: E402


@pytest.fixture
def taste_profile() -> TasteProfile:
    """Taste profile with every field populated."""
    return TasteProfile(
        loved_patterns=["smoky chipotle", "lemon-garlic"],
        disliked_patterns=["overly sweet sauces", "mushy textures"],
        spice_level="hot",
        texture_preferences=["crispy", "creamy"],
        flavor_bias=["umami", "citrus"],
    )


@pytest.fixture
def recipe_payload() -> dict:
    """One recipe element as the model returns it (wire field names)."""
    return {
        "title": "Spinach Frittata",
        "description": "A fluffy oven frittata.",
        "prepTime": "20 mins",
        "calories": 310,
        "servings_count": 2,
        "nutrition_source": "USDA",
        "is_estimated": False,
        "nutrition_total": {"calories": 620, "protein_g": 42, "carbs_g": 8, "fat_g": 44},
        "nutrition_per_serving": {"calories": 310, "protein_g": 21, "carbs_g": 4, "fat_g": 22},
        "ingredients": [
            {"name": "eggs", "amount": "6", "isMissing": False},
            {"name": "feta", "amount": "50 g", "isMissing": True},
        ],
        "instructions": ["Whisk 6 eggs.", "Bake for 15 minutes."],
    }
