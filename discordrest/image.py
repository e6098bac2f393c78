"""Images carried as ``data:`` URIs in request bodies."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

_ALLOWED_TYPES = frozenset({"image/png", "image/jpeg", "image/gif"})
_SNIFF_LENGTH = 512

_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


class InvalidImageError(ValueError):
    """The image data or its content type is not acceptable."""


class ImageTooLargeError(ValueError):
    """The image is larger than the allowed size."""

    def __init__(self, size: int, max_size: int) -> None:
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"Image is {size / 1000:.2f}kb, larger than {max_size / 1000:.2f}kb"
        )


def _detect_content_type(content: bytes) -> str:
    head = content[:_SNIFF_LENGTH]
    for signature, content_type in _SIGNATURES:
        if head.startswith(signature):
            return content_type
    return "application/octet-stream"


@dataclass
class Image:
    """Raw image content with an optional content type.

    An empty ``content_type`` is detected from the content when encoding.
    """

    content_type: str = ""
    content: bytes = b""

    def validate(self, max_size: int = 0) -> None:
        """Raise unless the image fits ``max_size`` (0 for any) and is PNG, JPEG or GIF."""
        if max_size > 0 and len(self.content) > max_size:
            raise ImageTooLargeError(len(self.content), max_size)
        if self.content_type not in _ALLOWED_TYPES:
            raise InvalidImageError("unknown image content-type")

    def encode(self) -> bytes:
        """Return the image as a ``data:<type>;base64,<data>`` URI."""
        content_type = self.content_type or _detect_content_type(self.content)
        Image(content_type, self.content).validate(0)
        encoded = base64.b64encode(self.content)
        return b"data:" + content_type.encode() + b";base64," + encoded

    def to_json(self) -> str | None:
        """Return the JSON value for this image: the data URI, or None if empty."""
        if not self.content:
            return None
        return self.encode().decode("ascii")

    @classmethod
    def from_json(cls, value: str | None) -> Image:
        """Build an image from its JSON value; null gives an empty image."""
        if value is None:
            return cls()
        value = value.strip('"')
        if value == "null":
            return cls()
        return decode_image(value)


def decode_image(data: bytes | str) -> Image:
    """Parse a ``data:<type>;base64,<data>`` URI into an Image."""
    if isinstance(data, str):
        data = data.encode()

    parts = data.split(b";", 1)
    if len(parts) < 2:
        raise InvalidImageError("invalid image data")
    header, body = parts

    if not header.startswith(b"data:"):
        raise InvalidImageError("invalid header: invalid image data")
    if not body.startswith(b"base64,"):
        raise InvalidImageError("invalid base64: invalid image data")

    try:
        content = base64.b64decode(body[len(b"base64,"):], validate=True)
    except binascii.Error as err:
        raise InvalidImageError("invalid base64: invalid image data") from err

    return Image(content_type=header[len(b"data:"):].decode(), content=content)