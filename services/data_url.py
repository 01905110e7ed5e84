import base64
import binascii

from exceptions import ImageDecodeError


def decode_data_url(data_url: str) -> bytes:
    """Return the raw bytes of a ``data:<mime>;base64,<payload>`` string.

    Only the part after the first comma is decoded; the media type prefix is
    ignored.
    """
    _, separator, payload = data_url.partition(",")
    if not separator or not payload.strip():
        raise ImageDecodeError("Invalid base64 image")

    try:
        return base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError("Invalid base64 image") from e
