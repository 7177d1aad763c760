from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from headshotstudio.services.transform_client import DEFAULT_MODEL

_API_KEY_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for a Headshot Studio session.

    api_key:
        Gemini API key. Empty means transforms fail with a configuration message.
    model:
        Image model used for the transform. Default gemini-2.5-flash-image.
    max_edge:
        Uploads are downscaled so their long edge is at most this many pixels.
        0 keeps the original resolution.
    log_level:
        Name of the logging level used by the launcher.
    """
    api_key: str = ""
    model: str = DEFAULT_MODEL
    max_edge: int = 1536
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()
        env = os.environ if environ is None else environ

        api_key = ""
        for name in _API_KEY_VARS:
            if env.get(name):
                api_key = env[name]
                break

        defaults = cls()
        return cls(
            api_key=api_key,
            model=env.get("HEADSHOT_MODEL") or defaults.model,
            max_edge=_int_or(env.get("HEADSHOT_MAX_EDGE"), defaults.max_edge),
            log_level=(env.get("HEADSHOT_LOG_LEVEL") or defaults.log_level).upper(),
        )


def _int_or(raw: Optional[str], default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
