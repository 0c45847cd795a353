import json
from typing import Any, Dict, List, Union

JsonValue = Union[None, bool, int, float, str, List["JsonValue"], Dict[str, "JsonValue"]]


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Produce the canonical byte encoding of a payload before encryption.

    Implementation Rules:
    1. Keys sorted lexicographically.
    2. No whitespace (separators: (',', ':')).
    3. NaN and Infinity are rejected (not valid JSON).
    4. UTF-8 encoded, non-ASCII kept as-is.

    Raises:
        TypeError, ValueError: if ``obj`` is not JSON-serializable.
    """
    canonical_str = json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return canonical_str.encode("utf-8")


def parse_json_bytes(data: bytes) -> JsonValue:
    """Inverse of canonical_json_bytes.

    Raises:
        UnicodeDecodeError, ValueError: if ``data`` is not UTF-8 JSON.
    """
    return json.loads(data.decode("utf-8"))
