"""Transfer market price helpers.

Market prices move in tiered increments: 50 coins up to 1,000, then 100
up to 10,000, 250 up to 50,000, 500 up to 100,000 and 1,000 above that.
"""

from __future__ import annotations

from typing import NamedTuple

MIN_PRICE = 150
MAX_PRICE = 15_000_000


class PriceTier(NamedTuple):
    start: int
    step: int


# Each tier applies from ``start`` (inclusive) until the next tier's start.
PRICE_TIERS: tuple[PriceTier, ...] = (
    PriceTier(0, 50),
    PriceTier(1_000, 100),
    PriceTier(10_000, 250),
    PriceTier(50_000, 500),
    PriceTier(100_000, 1_000),
)


def _tier_for(coins: int) -> PriceTier:
    tier = PRICE_TIERS[0]
    for candidate in PRICE_TIERS:
        if coins >= candidate.start:
            tier = candidate
    return tier


def is_price_valid(coins: int) -> bool:
    """Return True when ``coins`` is a price the market accepts.

    Examples:
        >>> is_price_valid(1_100)
        True
        >>> is_price_valid(1_150)
        False
    """
    if coins < MIN_PRICE or coins > MAX_PRICE:
        return False
    return coins % _tier_for(coins).step == 0


def calculate_valid_price(coins: int) -> int:
    """Round ``coins`` to the nearest valid price, clamped to the market range."""
    if coins <= MIN_PRICE:
        return MIN_PRICE
    if coins >= MAX_PRICE:
        return MAX_PRICE

    step = _tier_for(coins).step
    lower = coins - coins % step
    upper = lower + step
    return lower if coins - lower < upper - coins else min(upper, MAX_PRICE)


def calculate_next_lower_price(coins: int) -> int:
    """Return the highest valid price strictly below ``coins``.

    Never goes below ``MIN_PRICE``.
    """
    if coins <= MIN_PRICE:
        return MIN_PRICE
    # The step below a tier boundary belongs to the lower tier (1,000 -> 950).
    step = _tier_for(coins - 1).step
    remainder = coins % step
    return max(MIN_PRICE, coins - (remainder or step))


def calculate_next_higher_price(coins: int) -> int:
    """Return the lowest valid price strictly above ``coins``.

    Never goes above ``MAX_PRICE``.
    """
    if coins < MIN_PRICE:
        return MIN_PRICE
    step = _tier_for(coins).step
    return min(MAX_PRICE, coins - coins % step + step)


# Offsets added to a base id for each special card version, in order.
_VERSION_OFFSETS = (0x50000000, 0x03000000)
_VERSION_STEP = 0x01000000


def get_base_id(resource_id: int) -> int:
    """Strip card version offsets from an item resource id.

    Examples:
        >>> get_base_id(20801)
        20801
        >>> get_base_id(20801 + 0x50000000)
        20801
    """
    version = 0
    while resource_id > _VERSION_STEP:
        offset = _VERSION_OFFSETS[version] if version < len(_VERSION_OFFSETS) else _VERSION_STEP
        resource_id -= offset
        version += 1
    return resource_id
