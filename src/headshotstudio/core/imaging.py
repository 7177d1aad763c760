"""
Image helpers for the upload and result boundaries.

Uploaded photos are normalised before they are sent to the model:
- EXIF orientation applied
- converted to RGB
- long edge capped (OpenCV Lanczos resize) so requests stay small
"""

from __future__ import annotations

import io
import logging
from typing import Tuple

import cv2
import numpy as np
from PIL import Image, ImageOps

from headshotstudio.core.models import ImagePayload

logger = logging.getLogger(__name__)

_JPEG_FORMATS = {"JPEG", "MPO"}


def _pil_to_bgr_np(img: Image.Image) -> np.ndarray:
    """PIL RGB -> OpenCV BGR numpy array."""
    arr = np.array(img)
    return cv2.cvtColor(arr, cv2.COLOR_RGB2BGR)


def _bgr_np_to_pil(img_bgr: np.ndarray) -> Image.Image:
    """OpenCV BGR numpy array -> PIL RGB."""
    rgb = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)
    return Image.fromarray(rgb)


def fit_within(width: int, height: int, max_edge: int) -> Tuple[int, int]:
    """Return (w, h) scaled down so the long edge is at most max_edge. Never upscales."""
    if max_edge <= 0 or max(width, height) <= max_edge:
        return width, height
    scale = max_edge / float(max(width, height))
    return max(1, int(round(width * scale))), max(1, int(round(height * scale)))


def _downscale(img: Image.Image, max_edge: int) -> Image.Image:
    new_w, new_h = fit_within(img.width, img.height, max_edge)
    if (new_w, new_h) == (img.width, img.height):
        return img
    bgr = cv2.resize(_pil_to_bgr_np(img), (new_w, new_h), interpolation=cv2.INTER_LANCZOS4)
    return _bgr_np_to_pil(bgr)


def _encode(img: Image.Image, as_jpeg: bool) -> ImagePayload:
    buf = io.BytesIO()
    if as_jpeg:
        img.save(buf, format="JPEG", quality=95, optimize=True)
        return ImagePayload(data=buf.getvalue(), mime_type="image/jpeg")
    img.save(buf, format="PNG")
    return ImagePayload(data=buf.getvalue(), mime_type="image/png")


def payload_from_bytes(raw: bytes, max_edge: int = 0) -> ImagePayload:
    """
    Decode an uploaded image, normalise it, and re-encode it as a payload.

    JPEG sources stay JPEG; everything else is re-encoded as PNG.
    Raises PIL.UnidentifiedImageError if the bytes are not an image, and
    ValueError if the image is too large to decode safely.
    """
    try:
        img = Image.open(io.BytesIO(raw))
    except Image.DecompressionBombError as e:
        raise ValueError(f"image is too large: {e}") from e
    source_format = img.format
    img = ImageOps.exif_transpose(img)
    if img.mode != "RGB":
        img = img.convert("RGB")

    original_size = img.size
    img = _downscale(img, max_edge)
    if img.size != original_size:
        logger.info("Downscaled upload from %sx%s to %sx%s", *original_size, *img.size)

    return _encode(img, as_jpeg=source_format in _JPEG_FORMATS)


def load_payload(path: str, max_edge: int = 0) -> ImagePayload:
    with open(path, "rb") as f:
        raw = f.read()
    payload = payload_from_bytes(raw, max_edge=max_edge)
    logger.info("Loaded %s as %s (%d bytes)", path, payload.mime_type, len(payload.data))
    return payload


def payload_to_pil(payload: ImagePayload) -> Image.Image:
    img = Image.open(io.BytesIO(payload.data))
    img.load()
    if img.mode != "RGB":
        img = img.convert("RGB")
    return img


def save_payload(payload: ImagePayload, output_path: str) -> None:
    """Write a payload to disk, converting to the format implied by the file extension."""
    img = payload_to_pil(payload)
    out_lower = output_path.lower()
    if out_lower.endswith((".jpg", ".jpeg")):
        img.save(output_path, format="JPEG", quality=95, optimize=True)
    else:
        img.save(output_path)
    logger.info("Saved result to %s", output_path)
