"""Static descriptors for the LinxPay API operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EndpointSpec:
    """Path, HTTP method and required payload keys of one API operation.

    ``required_fields`` is checked in declaration order, so the first missing
    key reported is stable.
    """

    path: str
    method: str
    required_fields: tuple[str, ...] = ()


POLL = EndpointSpec(path="/api/v1/poll", method="GET")

REDEMPTION = EndpointSpec(
    path="/api/v1/redemptions/redemption",
    method="POST",
    required_fields=(
        "linx_card_number",
        "customer",
        "product_type",
        "store_location",
        "budtender",
        "amount",
    ),
)
