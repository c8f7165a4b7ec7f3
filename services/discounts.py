"""
Discount Policy

Candidate discount rates for a meal selection. Weekly discounts are not
stacked: each strategy in WEEKLY_DISCOUNT_STRATEGIES proposes a rate and the
highest one wins. On an exact tie the strategy listed first keeps the win,
so the order of that tuple is part of the pricing contract:

    1. days         (days per week)
    2. volume       (total items per week)
    3. promotional  (promo code)

The duration discount is a separate layer applied after the weekly one and
is never compared against the weekly candidates.
"""

from collections import namedtuple
from decimal import Decimal

ZERO = Decimal('0')

DiscountChoice = namedtuple('DiscountChoice', ['category', 'rate'])


def _tier_rate(value, tiers):
    """Return the rate of the first (min, max, rate) tier containing value."""
    for low, high, rate in tiers:
        if value >= low and (high is None or value <= high):
            return rate
    return ZERO


def days_discount_rate(days_per_week, config):
    return _tier_rate(days_per_week, config.days_tiers)


def volume_discount_rate(total_items, config):
    return _tier_rate(total_items, config.volume_tiers)


def promo_discount_rate(promo_code, config):
    """Rate for a promo code; unknown or missing codes give 0."""
    if not promo_code:
        return ZERO
    return config.promo_codes.get(promo_code.strip().lower(), ZERO)


def duration_discount_rate(duration, config):
    weeks, rate = config.durations[duration]
    return rate


def _days_candidate(selection, total_items, config):
    return days_discount_rate(selection.days_per_week, config)


def _volume_candidate(selection, total_items, config):
    return volume_discount_rate(total_items, config)


def _promo_candidate(selection, total_items, config):
    return promo_discount_rate(selection.promo_code, config)


# Priority order, highest first
WEEKLY_DISCOUNT_STRATEGIES = (
    ('days', _days_candidate),
    ('volume', _volume_candidate),
    ('promotional', _promo_candidate),
)


def weekly_discount_candidates(selection, total_items, config):
    """List of (category, rate) in priority order."""
    return [
        (category, strategy(selection, total_items, config))
        for category, strategy in WEEKLY_DISCOUNT_STRATEGIES
    ]


def best_weekly_discount(selection, total_items, config):
    """
    Pick the single weekly discount that applies.

    A later candidate only replaces the current winner when its rate is
    strictly greater.
    """
    winner = None
    for category, rate in weekly_discount_candidates(selection, total_items, config):
        if winner is None or rate > winner.rate:
            winner = DiscountChoice(category, rate)
    return winner
