import base64
from typing import Any


def request_body(event: dict[str, Any]) -> str:
    """Return the text body of an API Gateway proxy event.

    Raises ValueError (``binascii.Error`` or ``UnicodeDecodeError``) when a
    base64-encoded body cannot be decoded.
    """
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body, validate=True).decode("utf-8")
    return str(body)
