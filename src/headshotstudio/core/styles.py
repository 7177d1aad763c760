from __future__ import annotations

from typing import Mapping

from headshotstudio.core.models import BackgroundStyle, SuitStyle

SUIT_DESCRIPTIONS: Mapping[SuitStyle, str] = {
    SuitStyle.MODERN_BLACK: "a modern black formal suit with a crisp white shirt",
    SuitStyle.NAVY_BLUE: "a professional navy blue tailored suit with a light blue shirt",
    SuitStyle.FORMAL_GRAY: "a sophisticated charcoal gray suit with a white shirt",
    SuitStyle.CASUAL_WHITE: "a neat white professional blazer or shirt for a clean look",
}

BACKGROUND_DESCRIPTIONS: Mapping[BackgroundStyle, str] = {
    BackgroundStyle.LIGHT_GRAY: "a clean, minimal light gray professional studio background",
    BackgroundStyle.SOFT_BLUE: "a soft corporate blue studio background with gentle lighting",
    BackgroundStyle.CLASSIC_WHITE: "a bright and clean classic white studio background",
    BackgroundStyle.OFFICE_BLUR: "a modern office interior background with professional depth-of-field blur",
}

# Labels shown in the style pickers.
SUIT_LABELS: Mapping[SuitStyle, str] = {
    SuitStyle.MODERN_BLACK: "Modern black",
    SuitStyle.NAVY_BLUE: "Navy blue",
    SuitStyle.FORMAL_GRAY: "Formal gray",
    SuitStyle.CASUAL_WHITE: "Casual white",
}

BACKGROUND_LABELS: Mapping[BackgroundStyle, str] = {
    BackgroundStyle.LIGHT_GRAY: "Light gray",
    BackgroundStyle.SOFT_BLUE: "Soft blue",
    BackgroundStyle.CLASSIC_WHITE: "Classic white",
    BackgroundStyle.OFFICE_BLUR: "Office (blurred)",
}


def describe_suit(style: SuitStyle) -> str:
    return SUIT_DESCRIPTIONS[SuitStyle(style)]


def describe_background(style: BackgroundStyle) -> str:
    return BACKGROUND_DESCRIPTIONS[BackgroundStyle(style)]
