"""
Subscription Pause/Resume Service

Pauses and resumes a subscription and moves its pending deliveries.

Each operation runs as one transaction: the order row and its pending
deliveries are read with SELECT ... FOR UPDATE, the eligibility rules are
checked, and the state change plus every date shift are committed together.
Orders also carry a version counter, so a concurrent writer that slipped in
between read and write makes the commit fail instead of overwriting.

Rule violations are returned as a failed OperationResult, not raised, so
callers can branch on the outcome. Database failures are rolled back,
logged, and returned as a failed result with code 'storage_error'.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from constants import (
    DELIVERY_PENDING, PAUSE_NOTICE_HOURS, RESUME_NOTICE_HOURS, MAX_PAUSE_DAYS, MAX_PAUSES,
)
from models import db, Order, Delivery
from .errors import TransitionError
from .lifecycle import state_of, apply_state

logger = logging.getLogger(__name__)

NO_ELIGIBLE_DELIVERY = 'no_eligible_delivery'
INSUFFICIENT_NOTICE = 'insufficient_notice'
NOT_FOUND = 'not_found'
STORAGE_ERROR = 'storage_error'


@dataclass(frozen=True)
class OperationResult:
    success: bool
    message: str
    code: Optional[str] = None
    resume_date: Optional[date] = None

    @classmethod
    def failure(cls, code, message):
        return cls(success=False, message=message, code=code)

    def to_dict(self):
        data = {'success': self.success, 'message': self.message}
        if self.code:
            data['code'] = self.code
        if self.resume_date:
            data['resume_date'] = self.resume_date.isoformat()
        return data


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


def _locked_order(order_id):
    return (Order.query
            .filter_by(id=order_id)
            .with_for_update()
            .populate_existing()
            .first())


def _locked_pending_deliveries(order_id):
    """Pending deliveries of an order, earliest first, locked for update."""
    return (Delivery.query
            .filter_by(order_id=order_id, status=DELIVERY_PENDING)
            .order_by(Delivery.scheduled_date, Delivery.id)
            .with_for_update()
            .populate_existing()
            .all())


def _shift_end_date(order, shift):
    end = order.extended_end_date or order.original_end_date
    if end is not None:
        order.extended_end_date = end + shift


def pause_subscription(order_id, pause_duration_days, now=None,
                       notice_hours=PAUSE_NOTICE_HOURS, max_days=MAX_PAUSE_DAYS, max_pauses=MAX_PAUSES):
    """
    Pause a subscription for pause_duration_days.

    The pause starts at the first pending delivery at least notice_hours
    away. That delivery and every later pending one move forward by the
    pause duration; earlier deliveries still ship on their dates.

    Returns an OperationResult whose resume_date is the pause start plus
    the duration.
    """
    now = now or datetime.now()
    try:
        order = _locked_order(order_id)
        if order is None:
            db.session.rollback()
            return OperationResult.failure(NOT_FOUND, f'Order {order_id} not found')

        try:
            paused = state_of(order).pause(pause_duration_days, now, max_pauses=max_pauses, max_days=max_days)
        except TransitionError as e:
            db.session.rollback()
            logger.warning(f"Pause rejected for order {order_id}: {e.message}")
            return OperationResult.failure(e.code, e.message)

        floor = now + timedelta(hours=notice_hours)
        pending = _locked_pending_deliveries(order_id)
        eligible = [d for d in pending if d.scheduled_at >= floor]
        if not eligible:
            db.session.rollback()
            logger.warning(f"Pause rejected for order {order_id}: no delivery after {floor.isoformat()}")
            return OperationResult.failure(
                NO_ELIGIBLE_DELIVERY,
                f'No upcoming delivery is at least {notice_hours} hours away'
            )

        pause_start = eligible[0].scheduled_date
        shift = timedelta(days=pause_duration_days)
        apply_state(order, paused)
        moved = 0
        for delivery in pending:
            if delivery.scheduled_date >= pause_start:
                delivery.scheduled_date = delivery.scheduled_date + shift
                moved += 1
        _shift_end_date(order, shift)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to pause order {order_id}: {e}")
        return OperationResult.failure(STORAGE_ERROR, 'Failed to pause subscription')

    resume_date = pause_start + shift
    logger.info(f"Order {order_id} paused for {pause_duration_days} days, {moved} deliveries moved")
    return OperationResult(
        success=True,
        message=f'Subscription paused for {pause_duration_days} days. Deliveries resume on {resume_date.isoformat()}',
        resume_date=resume_date,
    )


def resume_subscription(order_id, resume_date=None, now=None, notice_hours=RESUME_NOTICE_HOURS):
    """
    Resume a paused subscription.

    Without resume_date only the status changes; the shift applied at
    pause time stands. With resume_date the remaining pending deliveries
    are re-based so the earliest one lands on resume_date, keeping their
    spacing. resume_date must be at least notice_hours away.
    """
    now = now or datetime.now()
    resume_date = _as_date(resume_date)
    try:
        order = _locked_order(order_id)
        if order is None:
            db.session.rollback()
            return OperationResult.failure(NOT_FOUND, f'Order {order_id} not found')

        try:
            active = state_of(order).resume()
        except TransitionError as e:
            db.session.rollback()
            logger.warning(f"Resume rejected for order {order_id}: {e.message}")
            return OperationResult.failure(e.code, e.message)

        if resume_date is None:
            apply_state(order, active)
            db.session.commit()
            logger.info(f"Order {order_id} resumed")
            return OperationResult(success=True, message='Subscription resumed')

        if datetime.combine(resume_date, time.min) < now + timedelta(hours=notice_hours):
            db.session.rollback()
            logger.warning(f"Resume rejected for order {order_id}: {resume_date} is inside the notice window")
            return OperationResult.failure(
                INSUFFICIENT_NOTICE,
                f'Resume date must be at least {notice_hours} hours from now'
            )

        pending = _locked_pending_deliveries(order_id)
        if pending:
            shift = timedelta(days=(resume_date - pending[0].scheduled_date).days)
            for delivery in pending:
                delivery.scheduled_date = delivery.scheduled_date + shift
            _shift_end_date(order, shift)
        apply_state(order, active)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to resume order {order_id}: {e}")
        return OperationResult.failure(STORAGE_ERROR, 'Failed to resume subscription')

    logger.info(f"Order {order_id} resumed, {len(pending)} deliveries re-based to {resume_date}")
    return OperationResult(
        success=True,
        message=f'Subscription resumed. Deliveries restart on {resume_date.isoformat()}',
        resume_date=resume_date,
    )
