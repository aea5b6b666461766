"""
Module: builder.output.logo

Purpose:
    Embed an institute logo in the paper as a PNG data URI so the rendered
    document is self-contained.

Key Functions:
    - logo_data_uri(): Thumbnail an image file and encode it
    - resolve_logo_src(): Logo src for RenderOptions (path, URL or None)

Dependencies:
    - PIL: Image loading and thumbnailing

Used By:
    - builder.output.renderer: Header block
"""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from PIL import Image

if TYPE_CHECKING:
    from ..config import RenderOptions

logger = logging.getLogger(__name__)


def logo_data_uri(path: Path, max_size_px: int = 96) -> str:
    """
    Load an image, shrink it to fit ``max_size_px`` and return a data URI.

    Transparency is preserved (PNG output).

    Raises:
        OSError: If the file is missing or not an image
    """
    with Image.open(path) as img:
        img.load()
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA")
        img.thumbnail((max_size_px, max_size_px))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
    encoded = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def resolve_logo_src(options: RenderOptions) -> Optional[str]:
    """
    Logo src for the header, or None when no usable logo is configured.

    An unreadable logo file is logged and skipped; the paper still renders.
    """
    if not options.show_logo:
        return None
    if options.logo_path is not None:
        try:
            return logo_data_uri(options.logo_path, options.logo_size_px)
        except OSError as e:
            logger.warning(f"Could not load logo {options.logo_path}: {e}")
            return options.logo_url or None
    return options.logo_url or None
