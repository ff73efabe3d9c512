"""Recipe generation: three schema-bound recipe candidates per request.

generate_recipes() compiles the caller's dietary mode, mood and taste profile
into one prompt, asks Gemini for JSON matching RECIPE_RESPONSE_SCHEMA, then
parses and validates the reply into RecipeCandidate objects.

Three candidates are requested ("Pantry Hero", "The Gap", "Chef's Choice").
The count and the role order are prompting contracts only: whatever number of
candidates comes back is returned in the order received.
"""

import json
import re
from typing import Any, Optional, Sequence

from google.genai import types
from pydantic import ValidationError

from fridge_chef.models.models import DietaryMode, EmotionalStyle, RecipeCandidate, TasteProfile
from fridge_chef.prompts.prompts import RECIPE_STRATEGIES, build_recipe_prompt
from fridge_chef.services.gemini import generate_content
from fridge_chef.utils.config import config
from fridge_chef.utils.errors import GenerationFailure
from fridge_chef.utils.logger import log_context, logger


PIPELINE = "Recipe generation"

_MACROS = ("calories", "protein_g", "carbs_g", "fat_g")

_NUTRITION_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={macro: types.Schema(type=types.Type.NUMBER) for macro in _MACROS},
    required=list(_MACROS),
)

RECIPE_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": types.Schema(type=types.Type.STRING),
            "description": types.Schema(type=types.Type.STRING),
            "prepTime": types.Schema(type=types.Type.STRING),
            "calories": types.Schema(type=types.Type.NUMBER),
            "servings_count": types.Schema(type=types.Type.NUMBER),
            "nutrition_source": types.Schema(type=types.Type.STRING),
            "is_estimated": types.Schema(type=types.Type.BOOLEAN),
            "nutrition_total": _NUTRITION_SCHEMA,
            "nutrition_per_serving": _NUTRITION_SCHEMA,
            "ingredients": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties={
                        "name": types.Schema(type=types.Type.STRING),
                        "amount": types.Schema(type=types.Type.STRING),
                        "isMissing": types.Schema(type=types.Type.BOOLEAN),
                    },
                    required=["name", "amount", "isMissing"],
                ),
            ),
            "instructions": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(type=types.Type.STRING),
            ),
        },
        required=[
            "title",
            "description",
            "prepTime",
            "calories",
            "ingredients",
            "instructions",
            "nutrition_total",
            "nutrition_per_serving",
            "servings_count",
        ],
    ),
)


def _load_json(response_text: str) -> Any:
    """Parse JSON from the model reply.

    Tries the full text first, then the outermost [...] block in case the
    model wrapped the array in prose or a code fence.

    Raises:
        GenerationFailure: If neither attempt yields valid JSON.
    """
    try:
        return json.loads(response_text)
    except json.JSONDecodeError as e:
        logger.debug(f"Direct JSON parse: {e}")

    json_match = re.search(r"\[.*\]", response_text, re.DOTALL)
    if json_match:
        try:
            return json.loads(json_match.group())
        except json.JSONDecodeError as e:
            logger.debug(f"Regex JSON extraction: {e}")

    logger.warning(f"Failed to parse JSON from Gemini response: {response_text[:200]!r}")
    raise GenerationFailure(f"{PIPELINE} returned malformed JSON")


def parse_recipe_response(response_text: Optional[str]) -> list[RecipeCandidate]:
    """Parse and validate the model's JSON reply into recipe candidates.

    Args:
        response_text: Raw reply text.

    Returns:
        One RecipeCandidate per array element, in order, with ids
        "recipe-0", "recipe-1", ... assigned by position (any id supplied by
        the model is replaced). "[]" yields an empty list.

    Raises:
        GenerationFailure: If the text is empty, is not valid JSON, is not a
            JSON array, or an element does not match the recipe schema.
    """
    if not response_text or not response_text.strip():
        raise GenerationFailure(f"{PIPELINE} returned no text")

    payload = _load_json(response_text)
    if not isinstance(payload, list):
        raise GenerationFailure(f"{PIPELINE} expected a JSON array, got {type(payload).__name__}")

    candidates = []
    for idx, item in enumerate(payload):
        if not isinstance(item, dict):
            raise GenerationFailure(f"Recipe {idx} is not a JSON object")
        try:
            candidates.append(RecipeCandidate.model_validate({**item, "id": f"recipe-{idx}"}))
        except ValidationError as e:
            logger.warning(f"Recipe {idx} failed schema validation: {e.error_count()} error(s)")
            raise GenerationFailure(f"Recipe {idx} does not match the recipe schema: {e}") from e

    return candidates


async def generate_recipes(
    ingredients: Sequence[str],
    mode: DietaryMode | str = DietaryMode.STANDARD,
    style: EmotionalStyle | str = EmotionalStyle.COMFORT,
    profile: Optional[TasteProfile] = None,
) -> list[RecipeCandidate]:
    """Generate recipe candidates for the ingredients on hand.

    Args:
        ingredients: Ingredient names, e.g. the output of extract_ingredients().
        mode: Dietary mode applied to every recipe.
        style: Mood driving the style constraint.
        profile: Optional taste memory for personalization.

    Returns:
        Validated candidates in response order (normally three). An empty
        list means the model returned "[]"; callers must handle it.

    Raises:
        TransportFailure: If the Gemini request could not complete.
        GenerationFailure: If the reply is empty, malformed or off-schema.
    """
    prompt = build_recipe_prompt(ingredients, mode=mode, style=style, profile=profile)

    response = await generate_content(
        PIPELINE,
        model=config.GEMINI_MODEL,
        contents=prompt,
        generation_config=types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RECIPE_RESPONSE_SCHEMA,
        ),
    )

    candidates = parse_recipe_response(response.text)

    if len(candidates) != len(RECIPE_STRATEGIES):
        logger.warning(
            f"Expected {len(RECIPE_STRATEGIES)} recipes, model returned {len(candidates)}",
            extra=log_context(PIPELINE, config.GEMINI_MODEL),
        )
    logger.info(
        f"Generated recipes: {[candidate.title for candidate in candidates]}",
        extra=log_context(PIPELINE, config.GEMINI_MODEL),
    )
    return candidates
