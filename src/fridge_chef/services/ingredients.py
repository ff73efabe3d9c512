"""Ingredient extraction from fridge and pantry photos using Gemini vision.

Core Functions:
- extract_ingredients(): Send one image and return the detected ingredient names (async)
- extract_ingredients_from_source(): Same, from a URL, data URI, base64 string or bytes (async)
- split_ingredient_list(): Turn the model's comma-separated reply into clean names
- validate_image_size(): Check MAX_IMAGE_SIZE_MB limit
- detect_mime_type(): Detect JPEG/PNG/WEBP from magic bytes
- compress_image(): Optional JPEG recompression before upload (COMPRESS_IMG)
- fetch_image_bytes(): Resolve an image source to raw bytes (async)

The model's reply is split on commas and trimmed; nothing else is normalized
(no dedup, case folding or singularization). A call either returns the full
list or raises: there are no retries and no partial results.
"""

import asyncio
import base64
import binascii
from io import BytesIO
from typing import Optional

import aiohttp
import filetype
from google.genai import types
from PIL import Image, UnidentifiedImageError

from fridge_chef.prompts.prompts import INGREDIENT_EXTRACTION_PROMPT
from fridge_chef.services.gemini import generate_content, response_text
from fridge_chef.utils.config import config
from fridge_chef.utils.errors import GenerationFailure, TransportFailure
from fridge_chef.utils.logger import log_context, logger


PIPELINE = "Ingredient extraction"

SUPPORTED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")


def split_ingredient_list(text: str) -> list[str]:
    """Split a comma-separated model reply into ingredient names.

    Args:
        text: Raw reply, e.g. "eggs, milk , ,spinach".

    Returns:
        Trimmed, non-empty segments in reply order (["eggs", "milk", "spinach"]).
    """
    return [segment.strip() for segment in text.split(",") if segment.strip()]


def validate_image_size(image_bytes: bytes) -> bool:
    """Validate image size against MAX_IMAGE_SIZE_MB.

    Args:
        image_bytes: Raw image bytes.

    Returns:
        True if size valid, False if exceeds limit.
    """
    size_mb = len(image_bytes) / (1024 * 1024)
    if size_mb > config.MAX_IMAGE_SIZE_MB:
        logger.warning(f"Image size {size_mb:.2f}MB exceeds limit of {config.MAX_IMAGE_SIZE_MB}MB")
        return False
    return True


def detect_mime_type(image_bytes: bytes) -> Optional[str]:
    """Detect the image MIME type from magic bytes.

    Uses filetype library to detect the actual format, not a file extension.

    Returns:
        "image/jpeg", "image/png" or "image/webp"; None for anything else.
    """
    kind = filetype.guess(image_bytes)
    if kind is None or kind.mime not in SUPPORTED_MIME_TYPES:
        logger.warning(f"Unsupported image format: {kind.mime if kind else 'unknown'}")
        return None
    return kind.mime


def compress_image(image_bytes: bytes, max_width: int = 1024) -> Optional[bytes]:
    """Recompress an image as JPEG for upload using Pillow.

    Converts alpha/palette modes to RGB on a white background and downsizes
    images wider than max_width. Images below COMPRESS_IMG_THRESHOLD_KB are
    left alone.

    Args:
        image_bytes: Raw image bytes to compress
        max_width: Maximum image width in pixels

    Returns:
        JPEG bytes, or None if the image was below the threshold or could not
        be decoded (the caller keeps the original).
    """
    size_kb = len(image_bytes) / 1024
    if size_kb < config.COMPRESS_IMG_THRESHOLD_KB:
        logger.debug(
            f"Image size {size_kb:.1f}KB below compression threshold "
            f"({config.COMPRESS_IMG_THRESHOLD_KB}KB), skipping compression"
        )
        return None

    try:
        img = Image.open(BytesIO(image_bytes))

        if img.mode in ("RGBA", "LA", "P"):
            img = img.convert("RGBA")
            rgb_img = Image.new("RGB", img.size, (255, 255, 255))
            rgb_img.paste(img, mask=img.split()[-1])
            img = rgb_img
        elif img.mode != "RGB":
            img = img.convert("RGB")

        if img.width > max_width:
            ratio = max_width / img.width
            img = img.resize((max_width, int(img.height * ratio)), Image.Resampling.LANCZOS)

        output = BytesIO()
        img.save(output, format="JPEG", quality=85, optimize=True, progressive=True)
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Image compression failed, sending original: {e}")
        return None

    compressed_bytes = output.getvalue()
    logger.debug(f"Image compressed: {size_kb:.1f}KB → {len(compressed_bytes) / 1024:.1f}KB")
    return compressed_bytes


async def fetch_image_bytes(image_source: str | bytes) -> bytes:
    """Resolve an image source to raw bytes.

    Handles multiple image source formats:
    - Direct bytes: Returned as-is
    - HTTP/HTTPS URLs: Fetched asynchronously (IMAGE_FETCH_TIMEOUT seconds)
    - Data URLs (data:image/jpeg;base64,...): Decoded from base64
    - Plain base64 strings: Decoded directly

    Raises:
        TransportFailure: If a URL cannot be downloaded.
        ValueError: If base64 data cannot be decoded or the source type is unsupported.
    """
    if isinstance(image_source, bytes):
        return image_source

    if not isinstance(image_source, str):
        raise ValueError(f"Unsupported image source type: {type(image_source).__name__}")

    if image_source.startswith(("http://", "https://")):
        timeout = aiohttp.ClientTimeout(total=config.IMAGE_FETCH_TIMEOUT)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(image_source) as response:
                    response.raise_for_status()
                    return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Fetch image from URL {image_source}: {e}", extra=log_context(PIPELINE))
            raise TransportFailure(f"Could not download image from {image_source}: {e}") from e

    encoded = image_source
    if image_source.startswith("data:"):
        _, separator, encoded = image_source.partition(",")
        if not separator:
            raise ValueError("Invalid data URI: missing ',' before the image data")
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


async def extract_ingredients(image_bytes: bytes, mime_type: str) -> list[str]:
    """Identify the individual food items visible in a photo.

    Sends one request to IMAGE_DETECTION_MODEL carrying the image and a fixed
    instruction to list only food items (no containers, brands or filler
    adjectives) as a flat comma-separated list.

    Args:
        image_bytes: Raw image bytes.
        mime_type: MIME type of image_bytes (e.g. "image/jpeg").

    Returns:
        Trimmed, non-empty ingredient names in the order the model listed
        them. Near-duplicates ("tomato", "Tomatoes") are kept.

    Raises:
        ValueError: If the image is empty or larger than MAX_IMAGE_SIZE_MB.
        TransportFailure: If the Gemini request could not complete.
        GenerationFailure: If the reply contains no ingredient names.
    """
    if not image_bytes:
        raise ValueError("Image is empty")
    if not validate_image_size(image_bytes):
        raise ValueError(f"Image too large. Maximum size is {config.MAX_IMAGE_SIZE_MB}MB")

    if config.COMPRESS_IMG:
        compressed = compress_image(image_bytes)
        if compressed is not None:
            image_bytes, mime_type = compressed, "image/jpeg"

    response = await generate_content(
        PIPELINE,
        model=config.IMAGE_DETECTION_MODEL,
        contents=[
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            INGREDIENT_EXTRACTION_PROMPT,
        ],
    )

    ingredients = split_ingredient_list(response_text(response, PIPELINE))
    if not ingredients:
        raise GenerationFailure(f"{PIPELINE} returned no ingredient names")

    logger.info(
        f"Ingredients extracted from image: {ingredients} (total: {len(ingredients)})",
        extra=log_context(PIPELINE, config.IMAGE_DETECTION_MODEL),
    )
    return ingredients


async def extract_ingredients_from_source(image_source: str | bytes) -> list[str]:
    """Extract ingredients from an image given as URL, data URI, base64 or bytes.

    The MIME type is detected from the decoded bytes; only JPEG, PNG and WEBP
    are accepted.

    Raises:
        ValueError: If the data cannot be decoded or is not a supported image.
        TransportFailure: If a URL cannot be downloaded or the Gemini request fails.
        GenerationFailure: If the reply contains no ingredient names.
    """
    image_bytes = await fetch_image_bytes(image_source)
    if not image_bytes:
        raise ValueError("Could not retrieve image bytes from provided data")

    mime_type = detect_mime_type(image_bytes)
    if mime_type is None:
        raise ValueError("Invalid image format. Only JPEG, PNG and WEBP are supported.")

    return await extract_ingredients(image_bytes, mime_type)
