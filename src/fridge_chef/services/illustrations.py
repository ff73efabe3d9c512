"""Recipe illustration with a deterministic placeholder fallback.

illustrate_recipe() asks the image model for one food photograph of the
recipe. The first inline image in the response is returned as a PNG data URI.
If the response holds no inline image, a placeholder URL seeded by the
URL-encoded title is returned instead: same title, same URL.
"""

import base64
from typing import Optional
from urllib.parse import quote

from google.genai import types

from fridge_chef.prompts.prompts import build_illustration_prompt
from fridge_chef.services.gemini import generate_content
from fridge_chef.utils.config import config
from fridge_chef.utils.logger import log_context, logger


PIPELINE = "Recipe illustration"

# Characters encodeURIComponent leaves unescaped, beyond the ones quote() keeps
_URI_COMPONENT_SAFE = "!~*'()"


def placeholder_image_url(recipe_title: str) -> str:
    """Return the placeholder image URL for a recipe title."""
    size = config.PLACEHOLDER_IMAGE_SIZE
    seed = quote(recipe_title, safe=_URI_COMPONENT_SAFE)
    return f"{config.PLACEHOLDER_IMAGE_BASE_URL.rstrip('/')}/{seed}/{size}/{size}"


def find_inline_image(response: types.GenerateContentResponse) -> Optional[str]:
    """Return the base64 payload of the first inline image in the response.

    Candidates are scanned in order, and parts in order within each candidate;
    scanning stops at the first part carrying inline data.

    Returns:
        Base64 text, or None if no part carries inline data.
    """
    for candidate in response.candidates or []:
        content = candidate.content
        for part in (content.parts if content else None) or []:
            inline_data = part.inline_data
            if inline_data is None or not inline_data.data:
                continue
            # The SDK hands back decoded bytes; keep already-encoded text as-is
            if isinstance(inline_data.data, bytes):
                return base64.b64encode(inline_data.data).decode("ascii")
            return inline_data.data
    return None


async def illustrate_recipe(recipe_title: str) -> str:
    """Generate a representative image for a recipe.

    Args:
        recipe_title: Title of the recipe to photograph.

    Returns:
        "data:image/png;base64,<payload>" for a generated image, otherwise the
        placeholder URL for the title.

    Raises:
        TransportFailure: If the Gemini request could not complete. A response
            without an image is not an error.
    """
    response = await generate_content(
        PIPELINE,
        model=config.IMAGE_GENERATION_MODEL,
        contents=[build_illustration_prompt(recipe_title)],
        generation_config=types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=config.IMAGE_ASPECT_RATIO),
        ),
    )

    context = log_context(PIPELINE, config.IMAGE_GENERATION_MODEL)
    payload = find_inline_image(response)
    if payload is not None:
        logger.info(f"Illustration generated for '{recipe_title}'", extra=context)
        return f"data:image/png;base64,{payload}"

    logger.info(f"No inline image for '{recipe_title}', using placeholder", extra=context)
    return placeholder_image_url(recipe_title)
