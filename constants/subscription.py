"""
Subscription Constants

Status values and timing rules for deliveries and the pause/resume workflow.
"""

# Order (subscription) statuses
ORDER_ACTIVE = 'active'
ORDER_PAUSED = 'paused'
ORDER_COMPLETED = 'completed'
ORDER_CANCELLED = 'cancelled'
ORDER_STATUSES = {ORDER_ACTIVE, ORDER_PAUSED, ORDER_COMPLETED, ORDER_CANCELLED}

# Delivery statuses
DELIVERY_PENDING = 'pending'
DELIVERY_DELIVERED = 'delivered'
DELIVERY_SKIPPED = 'skipped'
DELIVERY_PAUSED = 'paused'
DELIVERY_STATUSES = {DELIVERY_PENDING, DELIVERY_DELIVERED, DELIVERY_SKIPPED, DELIVERY_PAUSED}

# Lead time the kitchen needs before a delivery can be moved
PAUSE_NOTICE_HOURS = 72
RESUME_NOTICE_HOURS = 48

MAX_PAUSE_DAYS = 21
MAX_PAUSES = 1

WEEKDAY_NAMES = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')
DEFAULT_DELIVERY_DAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday')
