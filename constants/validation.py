"""
Validation Constants

Limits applied to request input before it reaches the engine.
"""

# Longest schedule that can be generated in one call
DEFAULT_SCHEDULE_WEEKS = 4
MAX_SCHEDULE_WEEKS = 52

# Maximum field lengths
MAX_LENGTHS = {
    'plan_id': 50,
    'promo_code': 50,
}

DATE_FORMAT = '%Y-%m-%d'
