from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from headshotstudio.core.models import ImagePayload

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash-image"

NO_IMAGE_MESSAGE = "Image transformation failed. Please try a different photo."
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."
MISSING_KEY_MESSAGE = "Gemini API key is not configured. Set GEMINI_API_KEY and restart."


class TransformFailed(Exception):
    """The remote model returned no usable image, or the call itself failed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ImageTransformClient:
    """
    Sends one photo + prompt to a Gemini image model and returns the first image it produces.

    Exactly one request per call; no retries and nothing cached.
    """

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, client: Optional[Any] = None):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise TransformFailed(MISSING_KEY_MESSAGE)
            try:
                self._client = genai.Client(api_key=self.api_key)
            except Exception as e:
                logger.error("Could not create Gemini client: %s", e)
                raise TransformFailed(str(e) or GENERIC_ERROR_MESSAGE) from e
        return self._client

    @staticmethod
    def build_contents(original: ImagePayload, prompt: str) -> types.Content:
        return types.Content(
            role="user",
            parts=[
                types.Part.from_bytes(data=original.data, mime_type=original.mime_type),
                types.Part.from_text(text=prompt),
            ],
        )

    async def transform(self, original: ImagePayload, prompt: str) -> ImagePayload:
        client = self._get_client()
        logger.info(
            "Requesting headshot from %s (%s, %d bytes)", self.model, original.mime_type, len(original.data)
        )
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=self.build_contents(original, prompt),
            )
        except Exception as e:
            logger.error("Headshot request failed: %s", e, exc_info=True)
            raise TransformFailed(str(e) or GENERIC_ERROR_MESSAGE) from e

        result = extract_first_image(response)
        if result is None:
            logger.warning("Model response contained no inline image")
            raise TransformFailed(NO_IMAGE_MESSAGE)

        logger.info("Received %s result (%d bytes)", result.mime_type, len(result.data))
        return result


def extract_first_image(response: Any) -> Optional[ImagePayload]:
    """
    Return the first inline image in the first candidate, or None.

    Parts whose inline data cannot be decoded are skipped.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) if content is not None else None
    if not parts:
        return None

    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline is None or not inline.data:
            continue
        data = inline.data
        if isinstance(data, str):
            try:
                data = base64.b64decode(data, validate=True)
            except (binascii.Error, ValueError) as e:
                logger.warning("Skipping inline part with undecodable data: %s", e)
                continue
            if not data:
                continue
        mime_type = inline.mime_type or ""
        if not mime_type.startswith("image/"):
            mime_type = "image/png"
        return ImagePayload(data=data, mime_type=mime_type)
    return None
