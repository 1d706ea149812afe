"""
Best-effort screenshot-style illustrations for spreadsheet comparisons.
"""

import base64
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional, Tuple

from dotenv import load_dotenv
from google import genai
from google.genai import types

from framemapper.errors import ImageGenerationFailure
from framemapper.models import ComparisonDraft, FrameworkPresentation
from framemapper.utils.llm_logger import get_logger


DEFAULT_IMAGE_MODEL = "gemini-2.0-flash-preview-image-generation"
RESPONSE_MODALITIES = ["TEXT", "IMAGE"]


def to_data_uri(data: Any, mime_type: Optional[str]) -> str:
    """Encode inline image data as a self-contained data URI."""
    if isinstance(data, str):
        # Already base64 text
        encoded = data
    else:
        encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or 'image/png'};base64,{encoded}"


def decode_data_uri(uri: str) -> Tuple[bytes, str]:
    """
    Decode a base64 data URI.

    Returns:
        Tuple of (image bytes, mime type).
    """
    header, _, encoded = uri.partition(",")
    if not header.startswith("data:") or ";base64" not in header or not encoded:
        raise ValueError("Not a base64 data URI")
    mime_type = header[len("data:"):].split(";", 1)[0] or "image/png"
    return base64.b64decode(encoded), mime_type


class ImageGenerator:
    """Generates illustrations through a Gemini image-capable model."""

    def __init__(self, client: Any, model_name: str = DEFAULT_IMAGE_MODEL):
        """
        Args:
            client: google-genai Client (or anything exposing models.generate_content).
            model_name: Image generation model identifier.
        """
        self.client = client
        self.model_name = model_name
        self.logger = get_logger()

    def generate(self, prompt: str) -> str:
        """
        Generate one image.

        Returns:
            Data URI of the first returned image.

        Raises:
            ImageGenerationFailure: call failed or returned no image.
        """
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(response_modalities=RESPONSE_MODALITIES),
            )
        except Exception as e:
            raise ImageGenerationFailure(f"Image request failed: {e}") from e

        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            raise ImageGenerationFailure("No candidates in image generation response")

        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and inline_data.data:
                return to_data_uri(inline_data.data, inline_data.mime_type)

        raise ImageGenerationFailure("No image data in image generation response")

    def image_for_side(self, side: FrameworkPresentation, label: str = "side") -> Optional[str]:
        """Image for one side, or None when not wanted or not available."""
        if not side.wants_image:
            return None
        try:
            return self.generate(side.image_prompt)
        except ImageGenerationFailure as e:
            self.logger.log_warning("image", f"{label}: {e}")
            return None

    def images_for(self, draft: ComparisonDraft) -> Tuple[Optional[str], Optional[str]]:
        """Generate images for both sides concurrently."""
        with ThreadPoolExecutor(max_workers=2) as pool:
            first = pool.submit(self.image_for_side, draft.side1, "side1")
            second = pool.submit(self.image_for_side, draft.side2, "side2")
            return first.result(), second.result()


def create_image_generator(
    api_key: Optional[str] = None,
    model_name: Optional[str] = None,
) -> Optional[ImageGenerator]:
    """
    Build an ImageGenerator from the environment.

    Returns None when no Google API key is configured, which disables images.
    """
    load_dotenv()

    key = api_key or os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
    if not key:
        return None

    return ImageGenerator(
        client=genai.Client(api_key=key),
        model_name=model_name or os.getenv("FRAMEMAPPER_IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
    )
