"""Form-body encoding for nested payloads.

``requests`` only encodes flat mappings. Servers built on PHP/Rails expect
nested values as bracketed keys, e.g. ``customer[type]=passport``, which is
what ``encode_form_fields`` produces.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _flatten(prefix: str, value: Any, out: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, out)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, out)
    else:
        out.append((prefix, _scalar(value)))


def encode_form_fields(fields: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Flatten a nested mapping into ordered form key/value pairs.

    ``None`` values are dropped, booleans become ``"1"``/``"0"``, and nested
    mappings and sequences use bracket notation.

    Args:
        fields: Payload to encode. ``None`` encodes to an empty body.

    Returns:
        List of ``(key, value)`` tuples suitable for ``requests``' ``data=``.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in (fields or {}).items():
        _flatten(str(key), value, pairs)
    return pairs
