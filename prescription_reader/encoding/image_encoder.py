from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Optional

from prescription_reader.analyzers.errors import MalformedEncodingError


@dataclass(frozen=True)
class ImageBlob:
    """Raw bytes of one user-selected file. Lives for a single analysis request."""
    data: bytes
    media_type: str
    filename: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class EncodedImage:
    """Base64 payload plus its media type, ready to be inlined into a model request."""
    media_type: str
    data: str

    def to_bytes(self) -> bytes:
        try:
            return base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedEncodingError(f"Invalid base64 payload: {e}") from e


def to_data_uri(blob: ImageBlob) -> str:
    payload = base64.b64encode(blob.data).decode("ascii")
    return f"data:{blob.media_type};base64,{payload}"


def parse_data_uri(uri: str) -> EncodedImage:
    """
    Split a `data:<media type>;base64,<payload>` URI into its parts.
    Raises MalformedEncodingError if either part comes out empty.
    """
    header, _, payload = uri.partition(",")
    _, _, scheme = header.partition(":")
    media_type = scheme.split(";", 1)[0]

    if not media_type or not payload:
        raise MalformedEncodingError(
            f"Unexpected data URI shape: media_type={media_type!r} payload_len={len(payload)}"
        )
    return EncodedImage(media_type=media_type, data=payload)


def encode_image(blob: ImageBlob) -> EncodedImage:
    return parse_data_uri(to_data_uri(blob))
