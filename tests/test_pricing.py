"""Unit tests for transfer market price helpers."""

import pytest

from fut_client.utils.pricing import (
    MAX_PRICE,
    MIN_PRICE,
    calculate_next_higher_price,
    calculate_next_lower_price,
    calculate_valid_price,
    get_base_id,
    is_price_valid,
)


@pytest.mark.parametrize(
    ("coins", "expected"),
    [
        (150, True),
        (950, True),
        (975, False),
        (1_100, True),
        (1_150, False),
        (10_250, True),
        (10_300, False),
        (50_500, True),
        (101_000, True),
        (101_500, False),
        (100, False),
        (MAX_PRICE + 1_000, False),
    ],
)
def test_is_price_valid(coins: int, expected: bool) -> None:
    assert is_price_valid(coins) is expected


@pytest.mark.parametrize(
    ("coins", "expected"),
    [
        (0, MIN_PRICE),
        (999, 1_000),
        (1_149, 1_100),
        (10_120, 10_000),
        (10_130, 10_250),
        (20_000_000, MAX_PRICE),
    ],
)
def test_calculate_valid_price(coins: int, expected: int) -> None:
    assert calculate_valid_price(coins) == expected


@pytest.mark.parametrize(
    ("coins", "expected"),
    [
        (1_000, 950),
        (1_100, 1_000),
        (1_050, 1_000),
        (10_000, 9_900),
        (100_000, 99_500),
        (200, MIN_PRICE),
        (MIN_PRICE, MIN_PRICE),
    ],
)
def test_calculate_next_lower_price(coins: int, expected: int) -> None:
    assert calculate_next_lower_price(coins) == expected


@pytest.mark.parametrize(
    ("coins", "expected"),
    [
        (950, 1_000),
        (1_000, 1_100),
        (1_050, 1_100),
        (9_900, 10_000),
        (10_000, 10_250),
        (100, MIN_PRICE),
        (MAX_PRICE, MAX_PRICE),
    ],
)
def test_calculate_next_higher_price(coins: int, expected: int) -> None:
    assert calculate_next_higher_price(coins) == expected


@pytest.mark.parametrize(
    ("resource_id", "expected"),
    [
        (20_801, 20_801),
        (20_801 + 0x50000000, 20_801),
        (20_801 + 0x50000000 + 0x03000000, 20_801),
        (20_801 + 0x50000000 + 0x03000000 + 0x01000000, 20_801),
    ],
)
def test_get_base_id(resource_id: int, expected: int) -> None:
    assert get_base_id(resource_id) == expected
