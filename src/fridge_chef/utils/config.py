"""Configuration management for the fridge-chef generation layer.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults

Validation is deferred until a Gemini client is created, so the package can be
imported (and the pure prompt helpers used) without credentials.
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()

# Aspect ratios accepted by Gemini image output
SUPPORTED_ASPECT_RATIOS = ("1:1", "2:3", "3:2", "3:4", "4:3", "4:5", "5:4", "9:16", "16:9", "21:9")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Recipe Model: structured JSON generation of the three recipe candidates
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
        # Image Detection Model: vision model that lists the food items in a photo
        self.IMAGE_DETECTION_MODEL: str = os.getenv("IMAGE_DETECTION_MODEL", "gemini-3-flash-preview")
        # Image Generation Model: must support inline image output
        self.IMAGE_GENERATION_MODEL: str = os.getenv("IMAGE_GENERATION_MODEL", "gemini-2.5-flash-image")
        # Aspect ratio requested for recipe illustrations. Default: square
        self.IMAGE_ASPECT_RATIO: str = os.getenv("IMAGE_ASPECT_RATIO", "1:1")
        # Placeholder image used when the image model returns no inline image.
        # Final URL: {PLACEHOLDER_IMAGE_BASE_URL}/{encoded title}/{size}/{size}
        self.PLACEHOLDER_IMAGE_BASE_URL: str = os.getenv("PLACEHOLDER_IMAGE_BASE_URL", "https://picsum.photos/seed")
        self.PLACEHOLDER_IMAGE_SIZE: int = int(os.getenv("PLACEHOLDER_IMAGE_SIZE", "600"))
        # Maximum image size (in MB) accepted for ingredient extraction. Default: 5 MB
        self.MAX_IMAGE_SIZE_MB: int = int(os.getenv("MAX_IMAGE_SIZE_MB", "5"))
        # Image Compression: recompress photos as JPEG before sending them. Default: off
        self.COMPRESS_IMG: bool = os.getenv("COMPRESS_IMG", "false").lower() in ("true", "1", "yes")
        # Image Compression Threshold: only compress images at or above this size (in KB)
        self.COMPRESS_IMG_THRESHOLD_KB: int = int(os.getenv("COMPRESS_IMG_THRESHOLD_KB", "300"))
        # Timeout (seconds) when downloading an image from an http(s) URL
        self.IMAGE_FETCH_TIMEOUT: int = int(os.getenv("IMAGE_FETCH_TIMEOUT", "10"))

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If the API key is missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if self.IMAGE_ASPECT_RATIO not in SUPPORTED_ASPECT_RATIOS:
            raise ValueError(
                f"IMAGE_ASPECT_RATIO must be one of {', '.join(SUPPORTED_ASPECT_RATIOS)}, "
                f"got: {self.IMAGE_ASPECT_RATIO}"
            )
        if self.PLACEHOLDER_IMAGE_SIZE < 1:
            raise ValueError(
                f"PLACEHOLDER_IMAGE_SIZE must be at least 1 pixel, got: {self.PLACEHOLDER_IMAGE_SIZE}"
            )
        if self.MAX_IMAGE_SIZE_MB < 1:
            raise ValueError(
                f"MAX_IMAGE_SIZE_MB must be at least 1, got: {self.MAX_IMAGE_SIZE_MB}"
            )
        if self.COMPRESS_IMG_THRESHOLD_KB < 0:
            raise ValueError(
                f"COMPRESS_IMG_THRESHOLD_KB must not be negative, got: {self.COMPRESS_IMG_THRESHOLD_KB}"
            )
        if self.IMAGE_FETCH_TIMEOUT < 1:
            raise ValueError(
                f"IMAGE_FETCH_TIMEOUT must be at least 1 second, got: {self.IMAGE_FETCH_TIMEOUT}"
            )


# Create module-level config instance (validated when a client is created)
config = Config()
