"""Raster export of rendered workflow surfaces."""

from __future__ import annotations

import io
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Workflow
    from .raster import RenderSurface

logger = logging.getLogger(__name__)

JPEG_QUALITY = 90

# Accepted format names -> Pillow encoder
IMAGE_FORMATS = {
    "png": "PNG",
    "jpeg": "JPEG",
    "jpg": "JPEG",
}


def _encoder(fmt: str) -> str:
    try:
        return IMAGE_FORMATS[fmt.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported image format '{fmt}', must be one of {', '.join(IMAGE_FORMATS)}"
        ) from None


def export_image(surface: RenderSurface | None, fmt: str = "png") -> bytes | None:
    """Encode a rendered surface as PNG or JPEG.

    Returns None when nothing has been rendered yet. The surface is only read.
    """
    if surface is None:
        return None
    encoder = _encoder(fmt)

    buffer = io.BytesIO()
    if encoder == "JPEG":
        surface.image.save(buffer, format=encoder, quality=JPEG_QUALITY)
    else:
        surface.image.save(buffer, format=encoder)
    return buffer.getvalue()


def export_filename(workflow_type: str, fmt: str = "png", when: datetime | None = None) -> str:
    """Download name: workflow-<type>-<epoch millis>.<fmt>."""
    millis = int(when.timestamp() * 1000) if when is not None else time.time_ns() // 1_000_000
    return f"workflow-{workflow_type}-{millis}.{fmt}"


def save_image(
    surface: RenderSurface | None,
    workflow: Workflow | None,
    fmt: str = "png",
    directory: str | Path = ".",
    when: datetime | None = None,
) -> Path | None:
    """Write a rendered surface to `directory` under its download name."""
    data = export_image(surface, fmt)
    if data is None or workflow is None:
        return None

    path = Path(directory) / export_filename(workflow.workflow_type, fmt, when)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info("Saved %s (%d bytes)", path, len(data))
    return path
