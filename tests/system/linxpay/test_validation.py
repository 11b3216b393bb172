"""Unit tests for redemption field validation.

Tests cover required-field presence, product_type and amount rules, the
customer identity rules, nested name checks, and first-failure ordering.
"""

from __future__ import annotations

import copy
from decimal import Decimal

import pytest

from system.linxpay.endpoints import REDEMPTION
from system.linxpay.errors import ValidationError
from system.linxpay.validation import is_numeric, validate

REQUIRED = REDEMPTION.required_fields


def _with(fields, **changes):
    updated = copy.deepcopy(fields)
    updated.update(changes)
    return updated


@pytest.mark.unit
class TestRequiredFields:
    """Presence checks driven by the endpoint's required fields."""

    def test_valid_payload_passes(self, redemption_fields) -> None:
        assert validate(redemption_fields, REQUIRED) is None

    @pytest.mark.parametrize("missing", REQUIRED)
    def test_missing_required_field_raises(self, redemption_fields, missing: str) -> None:
        del redemption_fields[missing]

        with pytest.raises(ValidationError) as exc_info:
            validate(redemption_fields, REQUIRED)

        assert str(exc_info.value) == f"Missing required field {missing}"
        assert exc_info.value.field == missing

    def test_first_missing_field_in_declaration_order_is_reported(self) -> None:
        with pytest.raises(ValidationError, match="Missing required field linx_card_number"):
            validate({}, REQUIRED)

    @pytest.mark.parametrize(
        "field, message",
        [
            ("product_type", "Invalid product_type"),
            ("amount", "Invalid amount. amount must be numeric"),
            ("customer", "Invalid customer type"),
            ("store_location", "Invalid store name."),
            ("budtender", "Invalid budtender name."),
        ],
    )
    def test_key_present_with_none_value_is_rejected(
        self, redemption_fields, field: str, message: str
    ) -> None:
        with pytest.raises(ValidationError, match=message) as exc_info:
            validate(_with(redemption_fields, **{field: None}), REQUIRED)

        assert exc_info.value.field == field

    def test_none_value_satisfies_presence_check_only(self, redemption_fields) -> None:
        fields = _with(redemption_fields, amount=None)

        with pytest.raises(ValidationError) as exc_info:
            validate(fields, REQUIRED)

        assert not str(exc_info.value).startswith("Missing required field")

    def test_no_required_fields_accepts_empty_payload(self) -> None:
        assert validate({}) is None

    def test_non_mapping_payload_raises(self) -> None:
        with pytest.raises(ValidationError):
            validate(["linx_card_number"], REQUIRED)


@pytest.mark.unit
class TestProductType:
    @pytest.mark.parametrize("product_type", ["recreational", "medicinal"])
    def test_valid_product_types_pass(self, redemption_fields, product_type: str) -> None:
        assert validate(_with(redemption_fields, product_type=product_type), REQUIRED) is None

    @pytest.mark.parametrize("product_type", ["edible", "Medicinal", "", 1])
    def test_invalid_product_type_raises(self, redemption_fields, product_type) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate(_with(redemption_fields, product_type=product_type), REQUIRED)

        assert str(exc_info.value) == (
            'Invalid product_type. Valid values are "recreational" or "medicinal"'
        )
        assert exc_info.value.field == "product_type"


@pytest.mark.unit
class TestAmount:
    @pytest.mark.parametrize("amount", [12.5, 20, "12.50", " 7", "1e2", Decimal("5.25"), -3])
    def test_numeric_non_zero_amount_passes(self, redemption_fields, amount) -> None:
        assert validate(_with(redemption_fields, amount=amount), REQUIRED) is None

    @pytest.mark.parametrize("amount", ["abc", "", "12,50", "1.2.3", True, [10], {"v": 1}])
    def test_non_numeric_amount_raises(self, redemption_fields, amount) -> None:
        with pytest.raises(ValidationError, match="Invalid amount. amount must be numeric"):
            validate(_with(redemption_fields, amount=amount), REQUIRED)

    @pytest.mark.parametrize("amount", [0, 0.0, "0", "0.00", Decimal("0")])
    def test_zero_amount_raises(self, redemption_fields, amount) -> None:
        with pytest.raises(ValidationError, match="Invalid amount. amount can not be 0"):
            validate(_with(redemption_fields, amount=amount), REQUIRED)

    def test_is_numeric_rejects_bool(self) -> None:
        assert is_numeric(False) is False
        assert is_numeric(1) is True


@pytest.mark.unit
class TestCustomer:
    INVALID_TYPE = 'Invalid customer type. Must be "drivers_license" or "passport"'

    def test_missing_type_raises(self, redemption_fields) -> None:
        fields = _with(redemption_fields, customer={"id_number": "X1", "country": "US"})

        with pytest.raises(ValidationError) as exc_info:
            validate(fields, REQUIRED)

        assert str(exc_info.value) == self.INVALID_TYPE
        assert exc_info.value.field == "customer"

    @pytest.mark.parametrize("customer_type", ["ssn", "", "PASSPORT"])
    def test_unknown_type_raises(self, redemption_fields, customer_type: str) -> None:
        customer = {"type": customer_type, "id_number": "X1", "country": "US", "state": "CO"}

        with pytest.raises(ValidationError) as exc_info:
            validate(_with(redemption_fields, customer=customer), REQUIRED)

        assert str(exc_info.value) == self.INVALID_TYPE

    def test_non_mapping_customer_is_treated_as_missing_type(self, redemption_fields) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate(_with(redemption_fields, customer="passport"), REQUIRED)

        assert str(exc_info.value) == self.INVALID_TYPE

    def test_missing_id_number_raises(self, redemption_fields) -> None:
        customer = {"type": "passport", "country": "US"}

        with pytest.raises(ValidationError, match="Invalid customer id_number."):
            validate(_with(redemption_fields, customer=customer), REQUIRED)

    def test_drivers_license_without_state_raises(self, redemption_fields) -> None:
        customer = {"type": "drivers_license", "id_number": "D123"}

        with pytest.raises(ValidationError) as exc_info:
            validate(_with(redemption_fields, customer=customer), REQUIRED)

        assert str(exc_info.value) == (
            "Invalid customer state. Must provide customer state with a drivers_license type"
        )

    def test_drivers_license_with_state_passes(self, redemption_fields) -> None:
        customer = {"type": "drivers_license", "id_number": "D123", "state": "CO"}

        assert validate(_with(redemption_fields, customer=customer), REQUIRED) is None

    def test_passport_without_country_raises(self, redemption_fields) -> None:
        customer = {"type": "passport", "id_number": "X1"}

        with pytest.raises(ValidationError) as exc_info:
            validate(_with(redemption_fields, customer=customer), REQUIRED)

        assert str(exc_info.value) == (
            "Invalid customer state. Must provide customer country with a passport type"
        )

    def test_passport_with_country_passes(self, redemption_fields) -> None:
        assert validate(redemption_fields, REQUIRED) is None

    def test_type_is_read_from_customer_not_top_level_customer_type(
        self, redemption_fields
    ) -> None:
        """A stray top-level ``customer_type`` key never influences the check."""
        fields = _with(redemption_fields, customer_type="something-else")
        assert validate(fields, REQUIRED) is None

        fields = _with(
            redemption_fields,
            customer={"type": "ssn", "id_number": "X1"},
            customer_type="passport",
        )
        with pytest.raises(ValidationError, match="Invalid customer type"):
            validate(fields, REQUIRED)


@pytest.mark.unit
class TestNamedParties:
    def test_store_location_without_name_raises(self, redemption_fields) -> None:
        with pytest.raises(ValidationError, match="Invalid store name.") as exc_info:
            validate(_with(redemption_fields, store_location={"id": 4}), REQUIRED)

        assert exc_info.value.field == "store_location"

    def test_budtender_without_name_raises(self, redemption_fields) -> None:
        with pytest.raises(ValidationError, match="Invalid budtender name.") as exc_info:
            validate(_with(redemption_fields, budtender={"name": None}), REQUIRED)

        assert exc_info.value.field == "budtender"


@pytest.mark.unit
class TestRuleOrdering:
    def test_first_failing_rule_wins(self, redemption_fields) -> None:
        fields = _with(
            redemption_fields,
            product_type="edible",
            amount=0,
            customer={},
            budtender={},
        )

        with pytest.raises(ValidationError) as exc_info:
            validate(fields, REQUIRED)

        assert exc_info.value.field == "product_type"

    def test_amount_checked_before_customer(self, redemption_fields) -> None:
        fields = _with(redemption_fields, amount="abc", customer={"type": "ssn"})

        with pytest.raises(ValidationError) as exc_info:
            validate(fields, REQUIRED)

        assert exc_info.value.field == "amount"
