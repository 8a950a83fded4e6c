import datetime
import json

import yaml

from esrepl.errors import TranslationError


def _encode_default(value):
    # yaml.safe_load yields these for unquoted timestamps
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def translate(body: bytes) -> bytes:
    """Translate a YAML body into compact JSON bytes.

    An empty body stays empty so bodiless requests carry no payload.
    """
    if not body.strip():
        return b""
    try:
        doc = yaml.safe_load(body.decode("utf-8"))
    except (UnicodeDecodeError, yaml.YAMLError) as exc:
        raise TranslationError(f"body parse error: {exc}") from exc
    try:
        encoded = json.dumps(doc, separators=(",", ":"), ensure_ascii=False,
                             allow_nan=False, default=_encode_default)
    except (TypeError, ValueError) as exc:
        raise TranslationError(f"body to json encode error: {exc}") from exc
    return encoded.encode("utf-8")


def passthrough(body: bytes) -> bytes:
    return body
