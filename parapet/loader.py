from __future__ import annotations
import logging
from io import BytesIO
from pathlib import Path
from urllib.parse import urlparse

import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from parapet.errors import ImageLoadError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "parapet/0.1 (+wallpaper)"


def is_url(source: str) -> bool:
    return urlparse(str(source)).scheme.lower() in {"http", "https"}


def _fetch(url: str, user_agent: str, timeout: float) -> bytes:
    try:
        resp = requests.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ImageLoadError(f"failed to fetch {url}: {exc}") from exc
    return resp.content


def load_image(
    source: str | Path,
    *,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = 15.0,
) -> Image.Image:
    """Open a local file or http(s) URL and fully decode it.

    EXIF orientation is applied so the image is upright before placement.
    """
    text = str(source)
    try:
        if is_url(text):
            logger.info("fetching %s", text)
            img = Image.open(BytesIO(_fetch(text, user_agent, timeout)))
        else:
            path = Path(text).expanduser()
            if not path.is_file():
                raise ImageLoadError(f"no such image: {path}")
            img = Image.open(path)
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageLoadError(f"cannot decode {text}: {exc}") from exc

    img = ImageOps.exif_transpose(img)
    logger.debug("loaded %s: %dx%d %s", text, img.width, img.height, img.mode)
    return img
