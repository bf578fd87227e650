"""Cloudinary overlay URL composition.

Cloudinary renders transformations named in the delivery URL, between
the ``/upload/`` segment and the asset path::

    https://res.cloudinary.com/<cloud>/image/upload/<transformations>/v123/weweb/abc.jpg

Two text layers are added: the address/time watermark in the
bottom-right corner and the provenance label in the bottom-left.
"""

import logging
from dataclasses import dataclass

from geostamp.services.watermark import double_encode

logger = logging.getLogger(__name__)

UPLOAD_MARKER = "/upload/"


@dataclass(frozen=True)
class OverlayStyle:
    """Font and placement shared by both text layers."""

    font: str = "Doppio%20One_20_stroke"
    color: str = "FFF"
    border: str = "5px_solid_black"
    margin_x: int = 10
    margin_y: int = 5


DEFAULT_STYLE = OverlayStyle()


def _text_layer(text: str, gravity: str, style: OverlayStyle) -> str:
    return (
        f"l_text:{style.font}:{text},g_{gravity},"
        f"y_{style.margin_y},x_{style.margin_x},"
        f"co_rgb:{style.color},bo_{style.border}"
    )


def build_overlay_chain(
    label: str,
    watermark: str,
    style: OverlayStyle = DEFAULT_STYLE,
) -> str:
    """Build the transformation chain for both text layers.

    Args:
        label: Provenance label, e.g. ``"EXIF/DEVICE"``; encoded here.
        watermark: Watermark text, already double-encoded.
        style: Font and placement.

    Returns:
        Slash-terminated chain, ending with ``fl_keep_iptc`` so the
        delivered asset keeps the original's embedded metadata.
    """
    watermark_layer = _text_layer(watermark, "south_east", style)
    label_layer = _text_layer(double_encode(label), "south_west", style)
    return (
        f"f_auto,c_scale,fl_relative,{watermark_layer}/"
        f"c_scale,fl_relative,{label_layer}/"
        "fl_keep_iptc/"
    )


def compose_overlay_url(
    base_url: str,
    label: str,
    watermark: str,
    style: OverlayStyle = DEFAULT_STYLE,
) -> str:
    """Insert the overlay chain into a hosted image URL.

    The chain goes right after the first ``/upload/`` segment; the rest
    of the URL is left untouched. Each call inserts another chain, so
    compose once per base URL.

    Args:
        base_url: URL returned by the image host.
        label: Provenance label.
        watermark: Double-encoded watermark text.
        style: Font and placement.

    Returns:
        URL with overlays, or ``base_url`` unchanged if it has no
        ``/upload/`` segment.
    """
    if UPLOAD_MARKER not in base_url:
        logger.warning(f"No {UPLOAD_MARKER} segment in {base_url!r}; overlay skipped")
        return base_url

    chain = build_overlay_chain(label, watermark, style)
    return base_url.replace(UPLOAD_MARKER, f"{UPLOAD_MARKER}{chain}", 1)
