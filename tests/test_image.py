import pytest

from discordrest.image import (
    Image,
    ImageTooLargeError,
    InvalidImageError,
    decode_image,
)

PNG = b"\x89PNG\r\n\x1a\n" + b"pixels"
JPEG = b"\xff\xd8\xff" + b"pixels"
GIF = b"GIF89a" + b"pixels"


def test_encode_detects_png_without_mutating():
    img = Image(content=PNG)
    encoded = img.encode()
    assert encoded.startswith(b"data:image/png;base64,")
    assert img.content_type == ""


@pytest.mark.parametrize(
    ("content", "content_type"),
    [(PNG, "image/png"), (JPEG, "image/jpeg"), (GIF, "image/gif")],
)
def test_detected_type_round_trips(content, content_type):
    decoded = decode_image(Image(content=content).encode())
    assert decoded == Image(content_type=content_type, content=content)


@pytest.mark.parametrize("size", [0, 1, 2, 3, 4, 5])
def test_round_trip_any_length(size):
    img = Image(content_type="image/gif", content=bytes(range(size)) or b"")
    if size == 0:
        img = Image(content_type="image/gif", content=b"")
    assert decode_image(img.encode()) == img


def test_encode_unknown_content_raises():
    with pytest.raises(InvalidImageError, match="unknown image content-type"):
        Image(content=b"plain text").encode()


def test_validate_rejects_other_content_type():
    with pytest.raises(InvalidImageError, match="unknown image content-type"):
        Image(content_type="image/webp", content=PNG).validate(0)


def test_validate_too_large():
    img = Image(content_type="image/png", content=b"\x00" * 3000)
    with pytest.raises(ImageTooLargeError) as info:
        img.validate(2000)
    assert info.value.size == 3000
    assert info.value.max_size == 2000
    assert str(info.value) == "Image is 3.00kb, larger than 2.00kb"


def test_validate_zero_max_ignores_size():
    img = Image(content_type="image/png", content=b"\x00" * 300_000)
    assert img.validate(0) is None
    assert decode_image(img.encode()) == img


@pytest.mark.parametrize(
    ("data", "message"),
    [
        (b"no separator", "invalid image data"),
        (b"image/png;base64,AAAA", "invalid header"),
        (b"data:image/png;hex,AAAA", "invalid base64"),
        (b"data:image/png;base64,!!!!", "invalid base64"),
    ],
)
def test_decode_errors(data, message):
    with pytest.raises(InvalidImageError, match=message):
        decode_image(data)


def test_to_json_empty_is_none():
    assert Image().to_json() is None


def test_to_json_round_trips_through_from_json():
    img = Image(content_type="image/jpeg", content=JPEG)
    value = img.to_json()
    assert value.startswith("data:image/jpeg;base64,")
    assert Image.from_json(value) == img
    assert Image.from_json('"' + value + '"') == img


@pytest.mark.parametrize("value", [None, "null", '"null"'])
def test_from_json_null_is_empty(value):
    assert Image.from_json(value) == Image()