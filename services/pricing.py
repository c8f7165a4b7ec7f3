"""
Pricing Calculator

Turns a meal selection into a price breakdown. Pure functions, no database.

All arithmetic is done in Decimal and rounded to 2 places (half-up) only
when the result is built, so rounding never compounds between steps.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Optional

from constants import (
    BASE_PRICES, PLAN_MULTIPLIERS, DAYS_DISCOUNT_TIERS, VOLUME_DISCOUNT_TIERS,
    DURATIONS, DURATION_LABELS, PROMO_CODES, MEAL_COMBINATIONS,
    MIN_MEALS_PER_DAY, MIN_DAYS_PER_WEEK, MAX_DAYS_PER_WEEK, MAX_SNACKS_PER_DAY,
)
from .discounts import best_weekly_discount, duration_discount_rate
from .errors import ValidationError

CENT = Decimal('0.01')
ONE = Decimal('1')


def _dec(value):
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _money(value):
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def _rate(value):
    return float(value)


def whole_number(value):
    """
    Convert request input to an int without truncating.

    Accepts ints, floats with no fractional part, and digit strings.
    Raises ValueError or TypeError for anything else, booleans included.
    """
    if isinstance(value, bool):
        raise TypeError(f"not a whole number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not a whole number: {value!r}")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"not a whole number: {value!r}")


def _tiers(tiers):
    return tuple((low, high, _dec(rate)) for low, high, rate in tiers)


@dataclass(frozen=True)
class PricingConfig:
    """
    Prices and discount tables. Immutable; pass it explicitly.

    durations maps a duration category to (weeks, rate).
    """
    main_meal_price: Decimal
    breakfast_price: Decimal
    snack_price: Decimal
    plan_multipliers: MappingProxyType
    days_tiers: tuple
    volume_tiers: tuple
    durations: MappingProxyType
    promo_codes: MappingProxyType

    @classmethod
    def build(cls, base_prices, plan_multipliers, days_tiers, volume_tiers, durations, promo_codes):
        """Build a config from plain tables, converting every number to Decimal."""
        return cls(
            main_meal_price=_dec(base_prices['main_meal']),
            breakfast_price=_dec(base_prices['breakfast']),
            snack_price=_dec(base_prices['snack']),
            plan_multipliers=MappingProxyType({k: _dec(v) for k, v in plan_multipliers.items()}),
            days_tiers=_tiers(days_tiers),
            volume_tiers=_tiers(volume_tiers),
            durations=MappingProxyType({k: (int(w), _dec(r)) for k, (w, r) in durations.items()}),
            promo_codes=MappingProxyType({k.lower(): _dec(v) for k, v in promo_codes.items()}),
        )


def default_pricing_config():
    """Pricing config built from the tables in constants.pricing."""
    return PricingConfig.build(
        BASE_PRICES, PLAN_MULTIPLIERS, DAYS_DISCOUNT_TIERS,
        VOLUME_DISCOUNT_TIERS, DURATIONS, PROMO_CODES,
    )


@dataclass(frozen=True)
class MealSelection:
    """What the customer picked on the quote screen."""
    plan_id: str
    main_meals: int
    breakfasts: int
    snacks: int
    days_per_week: int
    duration: str
    promo_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        """
        Build a selection from request data.

        Raises ValidationError when numeric fields are not integers.
        """
        errors = []
        numbers = {}
        for name in ('main_meals', 'breakfasts', 'snacks', 'days_per_week'):
            raw = data.get(name, 0)
            try:
                numbers[name] = whole_number(raw)
            except (ValueError, TypeError):
                errors.append(f'{name} must be a whole number')
        if errors:
            raise ValidationError(errors)
        return cls(
            plan_id=str(data.get('plan_id') or ''),
            duration=str(data.get('duration') or ''),
            promo_code=str(data['promo_code']) if data.get('promo_code') else None,
            **numbers
        )


@dataclass(frozen=True)
class PricingResult:
    daily_cost: float
    weekly_subtotal: float
    weekly_cost: float
    subscription_subtotal: float
    subscription_cost: float
    weekly_discount_category: str
    weekly_discount_rate: float
    weekly_discount_amount: float
    duration_discount_rate: float
    duration_discount_amount: float
    total_savings: float
    unit_prices: dict = field(default_factory=dict)
    total_items: int = 0
    week_count: int = 0
    price_per_week: float = 0.0
    price_per_day: float = 0.0

    def to_dict(self):
        return {
            'daily_cost': self.daily_cost,
            'weekly_subtotal': self.weekly_subtotal,
            'weekly_cost': self.weekly_cost,
            'subscription_subtotal': self.subscription_subtotal,
            'subscription_cost': self.subscription_cost,
            'weekly_discount': {
                'category': self.weekly_discount_category,
                'rate': self.weekly_discount_rate,
                'amount': self.weekly_discount_amount,
            },
            'duration_discount': {
                'rate': self.duration_discount_rate,
                'amount': self.duration_discount_amount,
            },
            'total_savings': self.total_savings,
            'unit_prices': dict(self.unit_prices),
            'total_items': self.total_items,
            'week_count': self.week_count,
            'price_per_week': self.price_per_week,
            'price_per_day': self.price_per_day,
        }


def validate_selection(selection, config):
    """Return every rule the selection breaks (empty list when valid)."""
    errors = []
    pair = (selection.main_meals, selection.breakfasts)
    allowed = {(c['main_meals'], c['breakfasts']) for c in MEAL_COMBINATIONS}

    if selection.main_meals + selection.breakfasts < MIN_MEALS_PER_DAY:
        errors.append(f'Must select at least {MIN_MEALS_PER_DAY} meals per day')
    if pair not in allowed:
        errors.append('Meal combination must be 1 main meal + breakfast, 2 main meals, '
                      'or 2 main meals + breakfast')
    if selection.snacks < 0 or selection.snacks > MAX_SNACKS_PER_DAY:
        errors.append(f'Can select between 0 and {MAX_SNACKS_PER_DAY} snacks per day')
    if selection.days_per_week < MIN_DAYS_PER_WEEK:
        errors.append(f'Must select at least {MIN_DAYS_PER_WEEK} delivery days per week')
    if selection.days_per_week > MAX_DAYS_PER_WEEK:
        errors.append(f'Cannot select more than {MAX_DAYS_PER_WEEK} days per week')
    if selection.plan_id not in config.plan_multipliers:
        errors.append(f'Unknown plan: {selection.plan_id!r}')
    if selection.duration not in config.durations:
        errors.append('Subscription duration must be 1-week, 2-weeks, or 1-month')
    return errors


def calculate_final_price(selection, config):
    """
    Price a meal selection.

    Raises ValidationError listing all broken rules if the selection is
    invalid. The weekly discount is the single best of days/volume/promo;
    the duration discount is always applied on top of it.
    """
    errors = validate_selection(selection, config)
    if errors:
        raise ValidationError(errors)

    multiplier = config.plan_multipliers[selection.plan_id]
    main_price = config.main_meal_price * multiplier
    breakfast_price = config.breakfast_price * multiplier
    snack_price = config.snack_price  # snacks are exempt from plan multipliers

    daily_cost = (selection.main_meals * main_price
                  + selection.breakfasts * breakfast_price
                  + selection.snacks * snack_price)
    weekly_subtotal = daily_cost * selection.days_per_week
    items_per_day = selection.main_meals + selection.breakfasts + selection.snacks
    total_items = items_per_day * selection.days_per_week

    choice = best_weekly_discount(selection, total_items, config)
    weekly_discount_amount = weekly_subtotal * choice.rate
    weekly_cost = weekly_subtotal - weekly_discount_amount

    week_count, _ = config.durations[selection.duration]
    duration_rate = duration_discount_rate(selection.duration, config)
    subscription_subtotal = weekly_cost * week_count
    duration_discount_amount = subscription_subtotal * duration_rate
    subscription_cost = subscription_subtotal * (ONE - duration_rate)

    total_savings = weekly_subtotal * week_count - subscription_cost

    return PricingResult(
        daily_cost=_money(daily_cost),
        weekly_subtotal=_money(weekly_subtotal),
        weekly_cost=_money(weekly_cost),
        subscription_subtotal=_money(subscription_subtotal),
        subscription_cost=_money(subscription_cost),
        weekly_discount_category=choice.category,
        weekly_discount_rate=_rate(choice.rate),
        weekly_discount_amount=_money(weekly_discount_amount),
        duration_discount_rate=_rate(duration_rate),
        duration_discount_amount=_money(duration_discount_amount),
        total_savings=_money(total_savings),
        unit_prices={
            'main_meal': _money(main_price),
            'breakfast': _money(breakfast_price),
            'snack': _money(snack_price),
        },
        total_items=total_items,
        week_count=week_count,
        price_per_week=_money(subscription_cost / week_count),
        price_per_day=_money(subscription_cost / (selection.days_per_week * week_count)),
    )


def valid_meal_combinations():
    """The meal combinations a customer may choose from."""
    return [dict(c) for c in MEAL_COMBINATIONS]


def duration_options(config):
    """Duration choices with their week count and discount rate."""
    options = []
    for key, (weeks, rate) in config.durations.items():
        label, description = DURATION_LABELS.get(key, (key, ''))
        options.append({
            'duration': key,
            'weeks': weeks,
            'label': label,
            'description': description,
            'discount': _rate(rate),
        })
    return options
