"""
Pricing Constants

Base prices, plan multipliers and discount tiers used to build the
default pricing configuration. Prices are in MAD.
"""

# Base price per item
BASE_PRICES = {
    'main_meal': '40',   # Lunch or dinner
    'breakfast': '30',
    'snack': '15',
}

# Plan multipliers (nutrition complexity). Snacks are never multiplied.
PLAN_MULTIPLIERS = {
    'weight-loss': '1.0',
    'stay-fit': '0.95',
    'muscle-gain': '1.15',
    'keto': '1.1',
}

# (min, max, rate) tiers, max is inclusive
DAYS_DISCOUNT_TIERS = (
    (3, 4, '0'),
    (5, 6, '0.05'),
    (7, 7, '0.10'),
)

# Total items per week
VOLUME_DISCOUNT_TIERS = (
    (6, 13, '0'),
    (14, 20, '0.05'),
    (21, 35, '0.10'),
    (36, None, '0.15'),
)

# Duration category -> (weeks, rate)
DURATIONS = {
    '1-week': (1, '0'),
    '2-weeks': (2, '0.05'),
    '1-month': (4, '0.10'),
}

DURATION_LABELS = {
    '1-week': ('1 Week', 'Try it out'),
    '2-weeks': ('2 Weeks', 'Build the habit'),
    '1-month': ('1 Month', 'Most popular'),
}

PROMO_CODES = {
    'new-customer': '0.20',
    'ramadan': '0.15',
    'summer': '0.10',
    'bulk-order': '0.25',
}

# Allowed (main_meals, breakfasts) per day
MEAL_COMBINATIONS = (
    {'id': '1main-1breakfast', 'label': '1 Main Meal + Breakfast', 'main_meals': 1, 'breakfasts': 1,
     'description': 'Choose lunch OR dinner + breakfast'},
    {'id': '2main', 'label': '2 Main Meals', 'main_meals': 2, 'breakfasts': 0,
     'description': 'Lunch + dinner'},
    {'id': '2main-1breakfast', 'label': 'All Meals', 'main_meals': 2, 'breakfasts': 1,
     'description': 'Breakfast + lunch + dinner'},
)

MIN_MEALS_PER_DAY = 2
MIN_DAYS_PER_WEEK = 3
MAX_DAYS_PER_WEEK = 7
MAX_SNACKS_PER_DAY = 2
