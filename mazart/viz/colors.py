from functools import lru_cache
from typing import Dict, Tuple

import cv2
import numpy as np

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
LIGHT_GREY: RGB = (225, 225, 225)
GREY: RGB = (127, 127, 127)
BLACK: RGB = (0, 0, 0)
BLUE: RGB = (54, 54, 255)
TEAL: RGB = (54, 208, 208)
GREEN: RGB = (54, 255, 54)
YELLOW: RGB = (255, 255, 54)
ORANGE: RGB = (255, 54, 0)
RED: RGB = (255, 0, 0)
PURPLE: RGB = (208, 0, 208)

NAMED_COLORS: Dict[str, RGB] = {
    "white": WHITE,
    "light-grey": LIGHT_GREY,
    "grey": GREY,
    "black": BLACK,
    "blue": BLUE,
    "teal": TEAL,
    "green": GREEN,
    "yellow": YELLOW,
    "orange": ORANGE,
    "red": RED,
    "purple": PURPLE,
}


def parse_color(name: str) -> RGB:
    try:
        return NAMED_COLORS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown color '{name}', expected one of: {', '.join(NAMED_COLORS)}") from None


@lru_cache(maxsize=None)
def get_palette(colormap: int = cv2.COLORMAP_JET) -> np.ndarray:
    """
    256 entry RGB palette sampled from an OpenCV colour map.
    Returned as a (256, 3) uint8 array; treat it as read-only.
    """
    ramp = np.arange(256, dtype=np.uint8).reshape(-1, 1)
    bgr = cv2.applyColorMap(ramp, colormap)
    rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
    return rgb.reshape(-1, 3)
