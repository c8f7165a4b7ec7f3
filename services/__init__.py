"""
Services Package

Business logic for pricing meal subscriptions and scheduling their deliveries.
"""

from .errors import (
    ValidationError,
    StorageError,
    OrderNotFoundError,
    ScheduleExistsError,
    TransitionError,
)

from .discounts import (
    WEEKLY_DISCOUNT_STRATEGIES,
    DiscountChoice,
    best_weekly_discount,
    days_discount_rate,
    volume_discount_rate,
    promo_discount_rate,
    duration_discount_rate,
)

from .pricing import (
    PricingConfig,
    MealSelection,
    PricingResult,
    default_pricing_config,
    validate_selection,
    calculate_final_price,
    valid_meal_combinations,
    duration_options,
    whole_number,
)

from .schedule import (
    DeliverySchedule,
    schedule_dates,
    generate_schedule,
    get_delivery_schedule,
    mark_delivered,
)

from .subscription import (
    OperationResult,
    pause_subscription,
    resume_subscription,
)

__all__ = [
    # Errors
    'ValidationError',
    'StorageError',
    'OrderNotFoundError',
    'ScheduleExistsError',
    'TransitionError',
    # Discounts
    'WEEKLY_DISCOUNT_STRATEGIES',
    'DiscountChoice',
    'best_weekly_discount',
    'days_discount_rate',
    'volume_discount_rate',
    'promo_discount_rate',
    'duration_discount_rate',
    # Pricing
    'PricingConfig',
    'MealSelection',
    'PricingResult',
    'default_pricing_config',
    'validate_selection',
    'calculate_final_price',
    'valid_meal_combinations',
    'duration_options',
    'whole_number',
    # Schedule
    'DeliverySchedule',
    'schedule_dates',
    'generate_schedule',
    'get_delivery_schedule',
    'mark_delivered',
    # Subscription
    'OperationResult',
    'pause_subscription',
    'resume_subscription',
]
