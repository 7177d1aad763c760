from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from headshotstudio.core.models import (
    DEFAULT_BACKGROUND_STYLE,
    DEFAULT_SUIT_STYLE,
    BackgroundStyle,
    ImagePayload,
    SuitStyle,
)


class Screen(Enum):
    EMPTY = "empty"
    CONFIGURING = "configuring"
    PROCESSING = "processing"


@dataclass
class SessionState:
    """
    Mutable state for a single GUI session.

    Only HeadshotController writes to it; the window reads it to decide what to show.
    """
    # Images
    original_image: Optional[ImagePayload] = None
    result_image: Optional[ImagePayload] = None

    # Request status
    is_processing: bool = False
    error_message: Optional[str] = None

    # User choices
    suit_style: SuitStyle = DEFAULT_SUIT_STYLE
    background_style: BackgroundStyle = DEFAULT_BACKGROUND_STYLE

    @property
    def screen(self) -> Screen:
        if self.original_image is None:
            return Screen.EMPTY
        if self.is_processing:
            return Screen.PROCESSING
        return Screen.CONFIGURING

    def clear_images(self) -> None:
        """Drop both images and any error. Style choices are kept."""
        self.original_image = None
        self.result_image = None
        self.error_message = None
