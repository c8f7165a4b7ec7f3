"""
Constants Package

Business tables and limits shared by the models and services.
"""

from .pricing import (
    BASE_PRICES,
    PLAN_MULTIPLIERS,
    DAYS_DISCOUNT_TIERS,
    VOLUME_DISCOUNT_TIERS,
    DURATIONS,
    DURATION_LABELS,
    PROMO_CODES,
    MEAL_COMBINATIONS,
    MIN_MEALS_PER_DAY,
    MIN_DAYS_PER_WEEK,
    MAX_DAYS_PER_WEEK,
    MAX_SNACKS_PER_DAY,
)

from .subscription import (
    ORDER_ACTIVE,
    ORDER_PAUSED,
    ORDER_COMPLETED,
    ORDER_CANCELLED,
    ORDER_STATUSES,
    DELIVERY_PENDING,
    DELIVERY_DELIVERED,
    DELIVERY_SKIPPED,
    DELIVERY_PAUSED,
    DELIVERY_STATUSES,
    PAUSE_NOTICE_HOURS,
    RESUME_NOTICE_HOURS,
    MAX_PAUSE_DAYS,
    MAX_PAUSES,
    WEEKDAY_NAMES,
    DEFAULT_DELIVERY_DAYS,
)

from .validation import DEFAULT_SCHEDULE_WEEKS, MAX_SCHEDULE_WEEKS, MAX_LENGTHS, DATE_FORMAT
