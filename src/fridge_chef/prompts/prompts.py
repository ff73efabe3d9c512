"""Prompt templates for the extraction, recipe and illustration requests.

Every request is built from fixed text plus caller input only, so the same
inputs always produce the same prompt.
"""

from typing import Optional, Sequence

from fridge_chef.models.models import DietaryMode, EmotionalStyle, TasteProfile
from fridge_chef.prompts.constraints import (
    compile_dietary_constraint,
    compile_personalization_block,
    compile_style_constraint,
)


INGREDIENT_EXTRACTION_PROMPT = (
    "Identify all individual food ingredients visible in this refrigerator or pantry photo. "
    "Return only a comma-separated list of the items. "
    "Do not include containers, brands, or adjectives like 'fresh' or 'large' unless necessary."
)

PANTRY_STAPLES = ("oil", "salt", "pepper", "water")

# Strategy of each requested candidate, in the order the model is asked to return them.
# Roles are only communicated through the prompt; candidates carry no role tag.
RECIPE_STRATEGIES = (
    ("Pantry Hero", "A recipe using ONLY what the user has."),
    (
        "The Gap",
        "A high-value recipe that is missing EXACTLY ONE key ingredient. "
        'This ingredient should unlock a significantly different or "better" meal.',
    ),
    ("Chef's Choice", "A creative recipe using as many of the provided ingredients as possible."),
)

NUTRITION_RULES = """Nutrition Rules:
- For each recipe, calculate the Nutrition Breakdown (Macros).
- Use standard nutrition data (similar to USDA or Edamam).
- If exact amount is unknown, estimate a standard portion (e.g., 50g-100g) and mark is_estimated as true.
- Return nutrition_total (sum of all ingredients) and nutrition_per_serving.
- Required macros: calories (kcal), protein_g, carbs_g, fat_g."""

RECIPE_RULES = """Recipe Rules:
- For EVERY recipe, strictly highlight if an ingredient is missing (isMissing: true).
- Ensure instructions are clear steps.
- CRITICAL: When providing instructions for meal preparation, please include the quantity of each ingredient inside the instruction text itself.
- Output MUST be a valid JSON array of objects following the schema."""


def _enum_value(value) -> str:
    return value.value if isinstance(value, (DietaryMode, EmotionalStyle)) else str(value)


def _strategy_section() -> str:
    lines = [f"Strategy for the {len(RECIPE_STRATEGIES)} recipes:"]
    for idx, (name, description) in enumerate(RECIPE_STRATEGIES, start=1):
        lines.append(f'{idx}. "{name}": {description}')
    return "\n".join(lines)


def build_recipe_prompt(
    ingredients: Sequence[str],
    mode: DietaryMode | str = DietaryMode.STANDARD,
    style: EmotionalStyle | str = EmotionalStyle.COMFORT,
    profile: Optional[TasteProfile] = None,
) -> str:
    """Compose the recipe generation prompt.

    Args:
        ingredients: Ingredient names the user has on hand, in caller order.
        mode: Dietary mode applied to every recipe.
        style: Mood used for the style constraint.
        profile: Optional taste memory.

    Returns:
        Prompt with the ingredient list, pantry staples, dietary and style
        constraints, personalization block, three-strategy template and the
        nutrition and recipe rules.
    """
    return f"""Based on these ingredients: [{', '.join(ingredients)}], and basic pantry staples ({', '.join(PANTRY_STAPLES)}), generate {len(RECIPE_STRATEGIES)} distinct and valid recipes.

Dietary Mode: {_enum_value(mode)}
{compile_dietary_constraint(mode)}

User Mood/Emotion: {_enum_value(style)}
{compile_style_constraint(style)}
{compile_personalization_block(profile)}
{_strategy_section()}

{NUTRITION_RULES}

{RECIPE_RULES}"""


def build_illustration_prompt(recipe_title: str) -> str:
    """Compose the food photography prompt for a recipe title."""
    return (
        f"A high-quality, professional, minimalist overhead food photograph of {recipe_title}. "
        "Set on a clean kitchen counter with a soft minimalist blue background. "
        "Natural morning lighting, high resolution, aesthetic and appetizing presentation."
    )
