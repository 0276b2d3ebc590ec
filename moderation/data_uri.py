import asyncio
import base64
import binascii
import re
from typing import Tuple

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>[A-Za-z0-9+/=\s]*)$")


def encode_data_uri(mime_type: str, data: bytes) -> str:
    payload = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Split a `data:<mimetype>;base64,<payload>` URI into its MIME type and bytes.
    Raises ValueError for anything else.
    """
    match = _DATA_URI_RE.match(uri)
    if match is None:
        raise ValueError("Not a base64 data URI with a MIME type")
    try:
        data = base64.b64decode(match.group("payload"), validate=False)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc
    return match.group("mime"), data


async def read_as_data_uri(mime_type: str, data: bytes) -> str:
    """Encode off the event loop; pictures can be up to a couple of megabytes."""
    return await asyncio.to_thread(encode_data_uri, mime_type, data)
