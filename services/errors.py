"""
Service Errors

Exceptions raised by the pricing, schedule and subscription services.
Rule violations in the pause/resume workflow are returned as failed
results instead; see services.subscription.OperationResult.
"""


class ValidationError(Exception):
    """Raised when a meal selection breaks one or more rules."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))


class StorageError(Exception):
    """Raised when a read or write against the database fails."""
    pass


class OrderNotFoundError(Exception):
    """Raised when an order id does not match any row."""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f'Order {order_id} not found')


class ScheduleExistsError(Exception):
    """Raised when deliveries have already been generated for an order."""

    def __init__(self, order_id, count):
        self.order_id = order_id
        self.count = count
        super().__init__(f'Order {order_id} already has {count} deliveries')


class TransitionError(Exception):
    """Raised when a subscription state change is not allowed."""

    def __init__(self, code, message):
        self.code = code
        self.message = message
        super().__init__(message)
