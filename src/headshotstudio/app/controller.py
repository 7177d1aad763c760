from __future__ import annotations

import logging
from typing import Optional, Protocol, Union

from headshotstudio.app.state import Screen, SessionState
from headshotstudio.core.models import BackgroundStyle, ImagePayload, SuitStyle
from headshotstudio.core.prompt import build_prompt
from headshotstudio.services.transform_client import GENERIC_ERROR_MESSAGE, TransformFailed

logger = logging.getLogger(__name__)


class TransformClient(Protocol):
    async def transform(self, original: ImagePayload, prompt: str) -> ImagePayload: ...


class HeadshotController:
    """
    Owns the SessionState and applies user intents to it.

    upload / reset / transform are ignored while a transform is in flight
    (they return False); style changes are always accepted.
    """

    def __init__(self, client: TransformClient, state: Optional[SessionState] = None):
        self.client = client
        self.state = state if state is not None else SessionState()

    @property
    def screen(self) -> Screen:
        return self.state.screen

    def _busy(self, intent: str) -> bool:
        if self.state.is_processing:
            logger.warning("Ignoring %s while a transform is in progress", intent)
            return True
        return False

    def upload(self, image: ImagePayload) -> bool:
        if self._busy("upload"):
            return False
        self.state.original_image = image
        self.state.result_image = None
        self.state.error_message = None
        logger.info("Uploaded %r", image)
        return True

    def reset(self) -> bool:
        if self._busy("reset"):
            return False
        self.state.clear_images()
        logger.info("Session reset")
        return True

    def set_suit_style(self, style: Union[SuitStyle, str]) -> None:
        self.state.suit_style = SuitStyle(style)

    def set_background_style(self, style: Union[BackgroundStyle, str]) -> None:
        self.state.background_style = BackgroundStyle(style)

    def begin_transform(self) -> bool:
        """
        Claim the single in-flight slot for a transform.

        Marks the session as processing and clears the previous result and error.
        Returns False (and changes nothing) with no photo or while a transform
        is already running. Pair a successful claim with complete_transform().
        """
        if self.state.original_image is None:
            return False
        if self._busy("transform"):
            return False

        self.state.is_processing = True
        self.state.error_message = None
        self.state.result_image = None
        return True

    async def complete_transform(self) -> bool:
        """Call the client for a transform claimed by begin_transform()."""
        original = self.state.original_image
        try:
            prompt = build_prompt(self.state.suit_style, self.state.background_style)
            logger.info(
                "Transforming with suit=%s background=%s",
                self.state.suit_style.value,
                self.state.background_style.value,
            )
            self.state.result_image = await self.client.transform(original, prompt)
        except TransformFailed as e:
            self.state.error_message = e.message or GENERIC_ERROR_MESSAGE
        except Exception as e:
            logger.exception("Unexpected error during transform")
            self.state.error_message = str(e) or GENERIC_ERROR_MESSAGE
        finally:
            self.state.is_processing = False
        return self.state.result_image is not None

    async def transform(self) -> bool:
        """
        Run one headshot transform for the current photo and style choices.

        Returns True when a result image was produced. With no photo, or with a
        transform already running, the client is not called. Failures end up in
        state.error_message.
        """
        if not self.begin_transform():
            return False
        return await self.complete_transform()
