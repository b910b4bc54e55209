from __future__ import annotations

import re
from typing import Optional

from pygame import Color

_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    color = Color(int(r), int(g), int(b))
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"


def hex_to_rgb(value: str) -> Optional[tuple[int, int, int]]:
    match = _HEX_PATTERN.match(value)
    if match is None:
        return None
    color = Color("#" + "".join(match.groups()))
    return (color.r, color.g, color.b)


def grayscale(channel: int) -> str:
    channel = max(0, min(255, int(channel)))
    return rgb_to_hex(channel, channel, channel)
