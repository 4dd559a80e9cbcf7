import base64
import io

import pytest
from PIL import Image

from prescription_reader.analyzers.errors import MalformedEncodingError
from prescription_reader.encoding.image_encoder import (
    EncodedImage,
    ImageBlob,
    encode_image,
    parse_data_uri,
    to_data_uri,
)


def _make_png_bytes(w: int = 16, h: int = 8) -> bytes:
    img = Image.new("RGB", (w, h), color=(10, 20, 30))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.mark.parametrize(
    "data",
    [
        b"\x00",
        bytes(range(256)),
        b"\xff\xd8\xff\xe0" + b"jpeg-ish" * 100,
    ],
)
def test_payload_decodes_back_to_original_bytes(data):
    encoded = encode_image(ImageBlob(data=data, media_type="image/jpeg"))

    assert base64.b64decode(encoded.data) == data
    assert encoded.to_bytes() == data


def test_real_png_round_trip_keeps_media_type():
    png = _make_png_bytes()
    encoded = encode_image(ImageBlob(data=png, media_type="image/png", filename="scan.png"))

    assert encoded.media_type == "image/png"
    assert encoded.to_bytes() == png


def test_data_uri_shape():
    uri = to_data_uri(ImageBlob(data=b"abc", media_type="image/png"))
    assert uri == "data:image/png;base64,YWJj"


def test_empty_file_is_malformed():
    with pytest.raises(MalformedEncodingError):
        encode_image(ImageBlob(data=b"", media_type="image/png"))


def test_missing_media_type_is_malformed():
    with pytest.raises(MalformedEncodingError):
        encode_image(ImageBlob(data=b"abc", media_type=""))


@pytest.mark.parametrize(
    "uri",
    [
        "data:;base64,YWJj",
        "data:image/png;base64,",
        "not-a-data-uri",
    ],
)
def test_parse_rejects_empty_segments(uri):
    with pytest.raises(MalformedEncodingError) as e:
        parse_data_uri(uri)

    assert e.value.user_message == "Failed to parse base64 string."


def test_parse_splits_on_first_comma_only():
    encoded = parse_data_uri("data:image/webp;base64,AAAA,BBBB")
    assert encoded == EncodedImage(media_type="image/webp", data="AAAA,BBBB")


def test_encoding_is_idempotent():
    blob = ImageBlob(data=b"same bytes", media_type="image/gif")
    assert encode_image(blob) == encode_image(blob)


def test_to_bytes_rejects_invalid_base64():
    with pytest.raises(MalformedEncodingError):
        EncodedImage(media_type="image/png", data="***").to_bytes()
