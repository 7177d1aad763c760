from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from enum import Enum


class SuitStyle(str, Enum):
    """Outfit the subject should be wearing in the generated headshot."""
    MODERN_BLACK = "modern-black"
    NAVY_BLUE = "navy-blue"
    FORMAL_GRAY = "formal-gray"
    CASUAL_WHITE = "casual-white"


class BackgroundStyle(str, Enum):
    """Studio backdrop behind the subject."""
    LIGHT_GRAY = "light-gray"
    SOFT_BLUE = "soft-blue"
    CLASSIC_WHITE = "classic-white"
    OFFICE_BLUR = "office-blur"


DEFAULT_SUIT_STYLE = SuitStyle.MODERN_BLACK
DEFAULT_BACKGROUND_STYLE = BackgroundStyle.LIGHT_GRAY

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


@dataclass(frozen=True)
class ImagePayload:
    """
    An encoded image kept in memory: raw bytes plus a media type.

    The app itself passes raw bytes end to end. from_data_uri / to_data_uri are
    conversion helpers for callers that exchange images as data URIs
    (``data:image/png;base64,...``).
    """
    data: bytes
    mime_type: str = "image/png"

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("image payload is empty")
        if not self.mime_type.startswith("image/"):
            raise ValueError(f"not an image media type: {self.mime_type!r}")

    @classmethod
    def from_data_uri(cls, uri: str) -> "ImagePayload":
        m = _DATA_URI_RE.match(uri.strip())
        if m is None:
            raise ValueError("expected a base64 data URI")
        try:
            data = base64.b64decode(m.group("data"), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"invalid base64 payload: {e}") from e
        return cls(data=data, mime_type=m.group("mime").lower())

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    def __repr__(self) -> str:
        return f"ImagePayload(mime_type={self.mime_type!r}, size={len(self.data)})"
