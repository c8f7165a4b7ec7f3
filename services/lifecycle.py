"""
Subscription Lifecycle

The active -> paused -> active state machine. A subscription is loaded into
one of the state types below with state_of(); the pause() and resume()
methods are the only way to move between states and raise TransitionError
when the move is not allowed. apply_state() writes a state back to an order.

completed and cancelled are reached elsewhere (delivery completion,
cancellation) and accept neither transition.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from constants import (
    ORDER_ACTIVE, ORDER_PAUSED, ORDER_COMPLETED, ORDER_CANCELLED,
    MAX_PAUSE_DAYS, MAX_PAUSES,
)
from .errors import TransitionError

# Failure codes
ALREADY_PAUSED = 'already_paused'
PAUSE_LIMIT_EXCEEDED = 'pause_limit_exceeded'
DURATION_TOO_LONG = 'duration_too_long'
INVALID_DURATION = 'invalid_duration'
NOT_PAUSED = 'not_paused'
NOT_ACTIVE = 'not_active'


@dataclass(frozen=True)
class Active:
    pause_count: int = 0

    status = ORDER_ACTIVE

    def pause(self, duration_days, now, max_pauses=MAX_PAUSES, max_days=MAX_PAUSE_DAYS):
        """Move to Paused, or raise TransitionError naming the broken rule."""
        if self.pause_count >= max_pauses:
            raise TransitionError(
                PAUSE_LIMIT_EXCEEDED,
                f'Subscription can only be paused {max_pauses} time(s) and the limit has been reached'
            )
        if duration_days > max_days:
            raise TransitionError(DURATION_TOO_LONG, f'Pause duration cannot exceed {max_days} days')
        if duration_days < 1:
            raise TransitionError(INVALID_DURATION, 'Pause duration must be at least 1 day')
        return Paused(
            pause_count=self.pause_count + 1,
            paused_at=now,
            pause_duration_days=duration_days,
        )

    def resume(self):
        raise TransitionError(NOT_PAUSED, 'Subscription is not paused')


@dataclass(frozen=True)
class Paused:
    pause_count: int
    paused_at: Optional[datetime]
    pause_duration_days: Optional[int]

    status = ORDER_PAUSED

    def pause(self, duration_days, now, max_pauses=MAX_PAUSES, max_days=MAX_PAUSE_DAYS):
        raise TransitionError(ALREADY_PAUSED, 'Subscription is already paused')

    def resume(self):
        return Active(pause_count=self.pause_count)


@dataclass(frozen=True)
class Closed:
    """Completed or cancelled subscription."""
    status: str
    pause_count: int = 0

    def pause(self, duration_days, now, max_pauses=MAX_PAUSES, max_days=MAX_PAUSE_DAYS):
        raise TransitionError(NOT_ACTIVE, f'Subscription is {self.status} and cannot be paused')

    def resume(self):
        raise TransitionError(NOT_PAUSED, 'Subscription is not paused')


def state_of(order):
    """Read the lifecycle state of an order row."""
    pause_count = order.pause_count or 0
    if order.status == ORDER_PAUSED:
        return Paused(pause_count, order.paused_at, order.pause_duration_days)
    if order.status in (ORDER_COMPLETED, ORDER_CANCELLED):
        return Closed(order.status, pause_count)
    return Active(pause_count)


def apply_state(order, state):
    """Write a state's fields onto an order row (does not commit)."""
    order.status = state.status
    order.pause_count = state.pause_count
    if isinstance(state, Paused):
        order.paused_at = state.paused_at
        order.pause_duration_days = state.pause_duration_days
