import os
from typing import Iterable, List

from PIL import ImageFont


_CUSTOM_FONT_PATHS: List[str] = []


def set_font_paths(paths: Iterable[str]) -> None:
    _CUSTOM_FONT_PATHS.clear()
    for p in paths:
        if p:
            _CUSTOM_FONT_PATHS.append(os.path.expanduser(str(p)))


def load_font(size: int) -> ImageFont.ImageFont:
    candidates = [
        *_CUSTOM_FONT_PATHS,
        "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    ]
    for p in candidates:
        if not os.path.exists(p):
            continue
        try:
            return ImageFont.truetype(p, size)
        except OSError:
            continue
    return ImageFont.load_default()
