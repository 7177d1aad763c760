from __future__ import annotations

from headshotstudio.core.models import BackgroundStyle, SuitStyle
from headshotstudio.core.styles import describe_background, describe_suit

IDENTITY_CLAUSE = (
    "Keep the person's exact facial features, hair structure, and identity identical to the original."
)


def build_prompt(suit: SuitStyle, background: BackgroundStyle) -> str:
    """
    Compose the instruction sent alongside the uploaded photo.

    The wording is fixed; only the outfit and backdrop phrases vary.
    """
    lines = [
        "Transform this person's photo into a professional studio headshot for a resume.",
        f"The person should be wearing {describe_suit(suit)}.",
        f"The background should be {describe_background(background)}.",
        f"CRITICAL: {IDENTITY_CLAUSE}",
        "Improve the grooming, align the posture to be professional, "
        "and ensure the lighting is high-end studio quality.",
        "The output must look like a high-resolution professional photography session.",
    ]
    return "\n".join(lines)
