"""Field validation for outgoing LinxPay payloads.

Rules run in a fixed order and the first violation raises ``ValidationError``.
The messages are part of the public contract; existing callers match on them.

Top-level rules run whenever the key is present, so a key mapped to None
fails them. Nested keys (customer.type, store_location.name, ...) must be
present and not None.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from system.linxpay.errors import ValidationError
from system.linxpay.models import CustomerType, ProductType

PRODUCT_TYPES = tuple(member.value for member in ProductType)
CUSTOMER_TYPES = tuple(member.value for member in CustomerType)

_NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

INVALID_CUSTOMER_TYPE = 'Invalid customer type. Must be "drivers_license" or "passport"'


def _is_set(fields: Any, key: str) -> bool:
    return isinstance(fields, Mapping) and fields.get(key) is not None


def is_numeric(value: Any) -> bool:
    """True for ints, floats, Decimals and numeric strings; False for bools."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC_STRING.match(value))
    return False


def _is_zero(value: Any) -> bool:
    if isinstance(value, str):
        return float(value) == 0
    return value == 0


def _validate_customer(customer: Any) -> None:
    if not _is_set(customer, "type"):
        raise ValidationError(INVALID_CUSTOMER_TYPE, "customer")

    customer_type = customer["type"]
    if customer_type not in CUSTOMER_TYPES:
        raise ValidationError(INVALID_CUSTOMER_TYPE, "customer")

    if not _is_set(customer, "id_number"):
        raise ValidationError("Invalid customer id_number.", "customer")

    if customer_type == CustomerType.DRIVERS_LICENSE.value and not _is_set(customer, "state"):
        raise ValidationError(
            "Invalid customer state. Must provide customer state with a drivers_license type",
            "customer",
        )

    if customer_type == CustomerType.PASSPORT.value and not _is_set(customer, "country"):
        raise ValidationError(
            "Invalid customer state. Must provide customer country with a passport type",
            "customer",
        )


def validate(fields: Mapping[str, Any], required_fields: Iterable[str] = ()) -> None:
    """Validate a payload against the required keys and the field rules.

    Args:
        fields: Payload about to be sent.
        required_fields: Keys that must be present in ``fields``.

    Raises:
        ValidationError: On the first rule that fails.
    """
    if not isinstance(fields, Mapping):
        raise ValidationError("Fields must be a mapping of field names to values")

    for name in required_fields:
        if name not in fields:
            raise ValidationError(f"Missing required field {name}", name)

    if "product_type" in fields and fields["product_type"] not in PRODUCT_TYPES:
        raise ValidationError(
            'Invalid product_type. Valid values are "recreational" or "medicinal"',
            "product_type",
        )

    if "amount" in fields:
        amount = fields["amount"]
        if not is_numeric(amount):
            raise ValidationError("Invalid amount. amount must be numeric", "amount")
        if _is_zero(amount):
            raise ValidationError("Invalid amount. amount can not be 0", "amount")

    if "customer" in fields:
        _validate_customer(fields["customer"])

    if "store_location" in fields and not _is_set(fields["store_location"], "name"):
        raise ValidationError("Invalid store name.", "store_location")

    if "budtender" in fields and not _is_set(fields["budtender"], "name"):
        raise ValidationError("Invalid budtender name.", "budtender")
