"""Unit tests for money validation, error types and boundary formatting."""

import uuid
from decimal import Decimal

import pytest

from storefront.core.exceptions import (
    AlreadyOwnedError,
    AppException,
    InsufficientFundsError,
    InvalidAmountError,
    NotFoundError,
)
from storefront.core.money import ZERO, quantize, total, validate_amount
from storefront.services.mappers import format_money


class TestValidateAmount:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("1"), Decimal("1.00")),
            (Decimal("0.01"), Decimal("0.01")),
            (Decimal("10.500"), Decimal("10.50")),
            ("29.99", Decimal("29.99")),
        ],
    )
    def test_accepts_and_normalizes(self, value, expected: Decimal) -> None:
        result = validate_amount(value, "Deposit")

        assert result == expected
        assert result.as_tuple().exponent == -2

    @pytest.mark.parametrize(
        "value",
        [None, Decimal("0"), Decimal("-5.00"), Decimal("0.001"), Decimal("NaN"), "abc"],
    )
    def test_rejects(self, value) -> None:
        with pytest.raises(InvalidAmountError):
            validate_amount(value, "Withdrawal")

    def test_maximum(self) -> None:
        assert validate_amount(Decimal("100.00"), "Deposit", Decimal("100.00")) == Decimal("100.00")
        with pytest.raises(InvalidAmountError) as exc_info:
            validate_amount(Decimal("100.01"), "Deposit", Decimal("100.00"))
        assert "must not exceed 100.00" in exc_info.value.message

    @pytest.mark.parametrize(
        "value",
        [Decimal("1E30"), Decimal("1" * 30 + ".001")],
    )
    def test_out_of_range(self, value: Decimal) -> None:
        with pytest.raises(InvalidAmountError) as exc_info:
            validate_amount(value, "Requested")
        assert exc_info.value.message == "Requested amount is out of range"

    def test_total_is_exact(self) -> None:
        assert total([Decimal("29.99"), Decimal("39.99")]) == Decimal("69.98")
        assert total([]) == ZERO
        assert total([Decimal("0.10")] * 3) == Decimal("0.30")

    def test_quantize_rounds_half_up(self) -> None:
        assert quantize(Decimal("2.005")) == Decimal("2.01")
        assert quantize(Decimal("2.004")) == Decimal("2.00")


class TestExceptions:

    def test_status_codes(self) -> None:
        assert NotFoundError("Game", "x").status_code == 404
        assert AlreadyOwnedError(["a"]).status_code == 409
        assert InvalidAmountError("Deposit").status_code == 422

    def test_all_are_app_exceptions(self) -> None:
        error = InsufficientFundsError("u", Decimal("69.98"), Decimal("10.00"))

        assert isinstance(error, AppException)
        assert error.message == (
            "Insufficient funds for user u: required 69.98, available 10.00"
        )

    def test_already_owned_lists_ids(self) -> None:
        ids = [uuid.uuid4(), uuid.uuid4()]

        error = AlreadyOwnedError(ids)

        assert error.game_ids == [str(game_id) for game_id in ids]
        assert str(ids[1]) in error.message

    def test_not_found_plain_message(self) -> None:
        assert NotFoundError("One or more games not found").message == (
            "One or more games not found"
        )


class TestFormatMoney:

    def test_formats_with_symbol(self) -> None:
        assert format_money(Decimal("29.9")) == "$29.90"
        assert format_money(None) == "$0.00"
        assert format_money(Decimal("5"), currency_symbol="EUR ") == "EUR 5.00"
