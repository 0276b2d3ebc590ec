import pytest

from moderation.data_uri import decode_data_uri, encode_data_uri


def test_encode_includes_mime_type_and_base64_payload():
    assert encode_data_uri("image/png", b"hello") == "data:image/png;base64,aGVsbG8="


def test_decode_splits_mime_and_bytes():
    mime, data = decode_data_uri("data:image/webp;base64,aGVsbG8=")
    assert mime == "image/webp"
    assert data == b"hello"


@pytest.mark.parametrize(
    "uri",
    [
        "aGVsbG8=",
        "data:;base64,aGVsbG8=",
        "data:image/png,aGVsbG8=",
        "https://example.com/me.png",
        "data:image/png;base64,***",
    ],
)
def test_decode_rejects_malformed_uris(uri):
    with pytest.raises(ValueError):
        decode_data_uri(uri)
