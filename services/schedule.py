"""
Delivery Schedule Service

Generates the delivery calendar for a new order, summarises it for the
customer, and records completed drop-offs.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from constants import (
    WEEKDAY_NAMES, DEFAULT_DELIVERY_DAYS, DELIVERY_PENDING, DELIVERY_DELIVERED,
    DELIVERY_STATUSES, ORDER_ACTIVE, ORDER_COMPLETED, PAUSE_NOTICE_HOURS, MAX_PAUSES,
)
from models import db, Order, Delivery
from .errors import OrderNotFoundError, ScheduleExistsError, StorageError

logger = logging.getLogger(__name__)


def normalize_day_names(day_names):
    """
    Lowercase and check weekday names.

    Raises ValueError for anything that is not a full English weekday name.
    """
    if day_names is None:
        return set(DEFAULT_DELIVERY_DAYS)
    names = {str(name).strip().lower() for name in day_names}
    unknown = sorted(names - set(WEEKDAY_NAMES))
    if unknown:
        raise ValueError(f"Unknown delivery day(s): {', '.join(unknown)}")
    if not names:
        raise ValueError('At least one delivery day is required')
    return names


def schedule_dates(start_date, total_weeks, delivery_day_names=None):
    """
    Dates from start_date for total_weeks weeks that fall on a delivery day.

    The range is start_date up to, not including, start_date + 7 * total_weeks,
    so each week contributes each delivery weekday exactly once.
    """
    if total_weeks < 1:
        raise ValueError('total_weeks must be at least 1')
    names = normalize_day_names(delivery_day_names)
    end = start_date + timedelta(days=7 * total_weeks)
    dates = []
    day = start_date
    while day < end:
        if WEEKDAY_NAMES[day.weekday()] in names:
            dates.append(day)
        day += timedelta(days=1)
    return dates


def generate_schedule(order_id, start_date, total_weeks, delivery_day_names=None):
    """
    Create one pending Delivery per matching day for an order.

    Refuses to run twice for the same order: raises ScheduleExistsError if
    the order already has deliveries. Returns the created rows.
    """
    names = normalize_day_names(delivery_day_names)
    dates = schedule_dates(start_date, total_weeks, names)
    try:
        order = Order.query.filter_by(id=order_id).with_for_update().first()
        if order is None:
            db.session.rollback()
            raise OrderNotFoundError(order_id)

        existing = Delivery.query.filter_by(order_id=order_id).count()
        if existing:
            db.session.rollback()
            logger.warning(f"Deliveries already exist for order {order_id}")
            raise ScheduleExistsError(order_id, existing)

        deliveries = [
            Delivery(order_id=order_id, scheduled_date=day, status=DELIVERY_PENDING)
            for day in dates
        ]
        db.session.add_all(deliveries)

        order.start_date = start_date
        order.total_weeks = total_weeks
        order.delivery_days = ','.join(d for d in WEEKDAY_NAMES if d in names)
        order.original_end_date = dates[-1] if dates else None
        order.extended_end_date = None
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error generating delivery schedule for order {order_id}: {e}")
        raise StorageError(f'Failed to generate delivery schedule for order {order_id}') from e

    logger.info(f"Generated {len(deliveries)} deliveries for order {order_id}")
    return deliveries


@dataclass
class DeliverySchedule:
    """Read model of an order's deliveries."""
    order_id: int
    deliveries: list = field(default_factory=list)
    total_deliveries: int = 0
    completed_deliveries: int = 0
    pending_deliveries: int = 0
    next_delivery_date: Optional[date] = None
    can_pause: bool = False
    pause_eligible_date: Optional[date] = None

    def to_dict(self):
        return {
            'order_id': self.order_id,
            'deliveries': [d.to_dict() for d in self.deliveries],
            'total_deliveries': self.total_deliveries,
            'completed_deliveries': self.completed_deliveries,
            'pending_deliveries': self.pending_deliveries,
            'next_delivery_date': self.next_delivery_date.isoformat() if self.next_delivery_date else None,
            'can_pause': self.can_pause,
            'pause_eligible_date': self.pause_eligible_date.isoformat() if self.pause_eligible_date else None,
        }


def get_delivery_schedule(order_id, now=None, notice_hours=PAUSE_NOTICE_HOURS):
    """
    Summarise an order's deliveries.

    can_pause is True when the order is active, its pause has not been
    used, and some pending delivery is at least notice_hours away;
    pause_eligible_date is the first such delivery.
    """
    now = now or datetime.now()
    try:
        order = db.session.get(Order, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        deliveries = (Delivery.query
                      .filter_by(order_id=order_id)
                      .order_by(Delivery.scheduled_date, Delivery.id)
                      .all())
    except SQLAlchemyError as e:
        logger.error(f"Error getting delivery schedule for order {order_id}: {e}")
        raise StorageError(f'Failed to load delivery schedule for order {order_id}') from e

    pending = [d for d in deliveries if d.status == DELIVERY_PENDING]
    floor = now + timedelta(hours=notice_hours)
    eligible = next((d for d in pending if d.scheduled_at >= floor), None)

    return DeliverySchedule(
        order_id=order_id,
        deliveries=deliveries,
        total_deliveries=len(deliveries),
        completed_deliveries=sum(1 for d in deliveries if d.status == DELIVERY_DELIVERED),
        pending_deliveries=len(pending),
        next_delivery_date=pending[0].scheduled_date if pending else None,
        can_pause=(order.status == ORDER_ACTIVE
                   and (order.pause_count or 0) < MAX_PAUSES
                   and eligible is not None),
        pause_eligible_date=eligible.scheduled_date if eligible else None,
    )


def mark_delivered(order_id, delivery_dates, status=DELIVERY_DELIVERED, now=None):
    """
    Set the status of an order's pending deliveries on the given dates.

    delivered_at is stamped when status is 'delivered'. When no pending
    deliveries remain an active order becomes completed. Returns the number
    of rows updated.
    """
    if status not in DELIVERY_STATUSES or status == DELIVERY_PENDING:
        raise ValueError(f'Invalid delivery status: {status}')
    now = now or datetime.now()
    dates = set(delivery_dates)
    try:
        order = Order.query.filter_by(id=order_id).with_for_update().first()
        if order is None:
            db.session.rollback()
            raise OrderNotFoundError(order_id)

        pending = (Delivery.query
                   .filter_by(order_id=order_id, status=DELIVERY_PENDING)
                   .with_for_update()
                   .all())
        updated = 0
        for delivery in pending:
            if delivery.scheduled_date in dates:
                delivery.status = status
                delivery.delivered_at = now if status == DELIVERY_DELIVERED else None
                updated += 1

        if updated and updated == len(pending) and order.status == ORDER_ACTIVE:
            order.status = ORDER_COMPLETED
            logger.info(f"Order {order_id} completed")
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error marking deliveries for order {order_id}: {e}")
        raise StorageError(f'Failed to update deliveries for order {order_id}') from e

    logger.info(f"{updated} deliveries marked as {status} for order {order_id}")
    return updated
