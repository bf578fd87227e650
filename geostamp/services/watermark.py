"""Watermark text construction.

The watermark has up to three lines::

    350 5th Ave
    New York, NY 10118
    07/04/23 12:00 PM

The overlay is embedded in a Cloudinary URL whose transformation parser
decodes its text parameter once, so the text is percent-encoded twice
on its way into the URL (see ``double_encode``).
"""

from typing import Optional
from urllib.parse import quote

from geostamp.models.geo import AddressComponents

# Characters JavaScript's encodeURIComponent leaves alone, besides
# ASCII letters and digits.
URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


def double_encode(value: str) -> str:
    """Percent-encode ``value`` twice for a text overlay parameter.

    Cloudinary decodes the text once before rendering, so a literal
    ``%0A`` or ``/`` has to arrive as ``%250A``/``%252F`` to survive.
    """
    return encode_uri_component(encode_uri_component(value))


def compose_watermark_text(
    address: Optional[AddressComponents],
    time: Optional[str],
) -> str:
    """Build the raw multi-line watermark text.

    Args:
        address: Resolved address, if any.
        time: Display-formatted time, if any.

    Returns:
        Newline-joined watermark text. The time line is always present,
        even when empty; the city line is kept when the address exists
        but some of its parts do not (e.g. ``", NY 10001"``).
    """
    line1 = ""
    line2 = ""
    line3 = time or ""

    if address is not None:
        line1 = f"{address.number or ''} {address.formatted_street or ''}".strip()
        line2 = f"{address.city or ''}, {address.state or ''} {address.zip or ''}".strip()

    text = line1
    if line2:
        text += f"\n{line2}"
    return f"{text}\n{line3}"


def build_watermark_string(
    address: Optional[AddressComponents],
    time: Optional[str],
) -> str:
    """Watermark text in its URL-ready, double-encoded form."""
    return double_encode(compose_watermark_text(address, time))
