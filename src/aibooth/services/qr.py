"""QR encoding of guest share links."""

import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M


def render_share_qr(share_url: str, box_size: int = 10, border: int = 4) -> bytes:
    """Encode the share URL as a black-on-white PNG."""
    if not share_url:
        raise ValueError("share_url is required")
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(share_url)
    qr.make(fit=True)
    image = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    image.save(buffer)
    return buffer.getvalue()
