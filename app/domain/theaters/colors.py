import math
import random

FALLBACK_COLOR = "E74C3C"
# greys, black and white read as "no category" on the seat map
RESERVED_COLORS = ("505050", "808080", "A9A9A9", "D3D3D3", "000000", "FFFFFF")

MIN_CHANNEL_SPREAD = 40
MIN_BRIGHTNESS = 50
MAX_BRIGHTNESS = 220
MIN_DISTANCE = 60
MAX_ATTEMPTS = 100


def _rgb(hex_color: str) -> tuple[int, int, int] | None:
    hex_color = hex_color.strip().lstrip("#")
    if len(hex_color) != 6:
        return None
    try:
        return int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)
    except ValueError:
        return None


def is_color_bad(r: int, g: int, b: int) -> bool:
    if max(r, g, b) - min(r, g, b) < MIN_CHANNEL_SPREAD:
        return True
    brightness = r * 0.299 + g * 0.587 + b * 0.114
    return brightness < MIN_BRIGHTNESS or brightness > MAX_BRIGHTNESS


def color_distance(first: str, second: str) -> float | None:
    a, b = _rgb(first), _rgb(second)
    if a is None or b is None:
        return None
    return math.dist(a, b)


def is_color_too_close(candidate: str, existing: list[str]) -> bool:
    for other in existing:
        if not other:
            continue
        distance = color_distance(candidate, other)
        if distance is not None and distance < MIN_DISTANCE:
            return True
    return False


def generate_color(used_colors: list[str], rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    excluded = [*used_colors, *RESERVED_COLORS]
    for _ in range(MAX_ATTEMPTS):
        r, g, b = rng.randrange(256), rng.randrange(256), rng.randrange(256)
        if is_color_bad(r, g, b):
            continue
        candidate = f"{r:02X}{g:02X}{b:02X}"
        if not is_color_too_close(candidate, excluded):
            return candidate
    return FALLBACK_COLOR
