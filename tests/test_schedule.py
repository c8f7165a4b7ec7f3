"""
Tests for delivery schedule generation, summary and completion.
"""

from datetime import date, datetime

import pytest

from constants import ORDER_COMPLETED, ORDER_ACTIVE, DELIVERY_DELIVERED, DELIVERY_PENDING, DELIVERY_SKIPPED
from models import db, Order, Delivery
from services import (
    ScheduleExistsError, OrderNotFoundError,
    schedule_dates, generate_schedule, get_delivery_schedule, mark_delivered,
)
from conftest import scheduled_dates


def test_schedule_dates_monday_wednesday_friday():
    dates = schedule_dates(date(2024, 1, 1), 1, {'Monday', 'Wednesday', 'Friday'})
    assert dates == [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 5)]


def test_schedule_dates_default_weekdays():
    dates = schedule_dates(date(2024, 1, 1), 2)
    assert len(dates) == 10
    assert all(d.weekday() < 5 for d in dates)
    assert dates[-1] == date(2024, 1, 12)


def test_schedule_dates_day_names_are_case_insensitive():
    dates = schedule_dates(date(2024, 1, 3), 1, ['MONDAY', 'friday'])
    assert dates == [date(2024, 1, 5), date(2024, 1, 8)]


def test_schedule_dates_rejects_unknown_day():
    with pytest.raises(ValueError):
        schedule_dates(date(2024, 1, 1), 1, ['Monday', 'Funday'])


def test_schedule_dates_rejects_zero_weeks():
    with pytest.raises(ValueError):
        schedule_dates(date(2024, 1, 1), 0)


def test_generate_schedule_persists_pending_deliveries(app, make_order):
    order_id = make_order()
    created = generate_schedule(order_id, date(2024, 1, 1), 1, {'Monday', 'Wednesday', 'Friday'})

    assert len(created) == 3
    rows = Delivery.query.filter_by(order_id=order_id).order_by(Delivery.scheduled_date).all()
    assert [d.scheduled_date for d in rows] == [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 5)]
    assert all(d.status == DELIVERY_PENDING for d in rows)

    order = db.session.get(Order, order_id)
    assert order.start_date == date(2024, 1, 1)
    assert order.total_weeks == 1
    assert order.delivery_day_names == ['monday', 'wednesday', 'friday']
    assert order.original_end_date == date(2024, 1, 5)


def test_generate_schedule_refuses_second_run(app, make_order):
    order_id = make_order()
    generate_schedule(order_id, date(2024, 1, 1), 1, {'Monday', 'Wednesday', 'Friday'})

    with pytest.raises(ScheduleExistsError) as excinfo:
        generate_schedule(order_id, date(2024, 1, 1), 1, {'Monday', 'Wednesday', 'Friday'})

    assert excinfo.value.count == 3
    assert len(scheduled_dates(order_id)) == 3


def test_generate_schedule_unknown_order(app):
    with pytest.raises(OrderNotFoundError):
        generate_schedule(999, date(2024, 1, 1), 1)


def test_delivery_schedule_summary(app, make_order):
    now = datetime(2024, 3, 4, 9, 0)
    order_id = make_order(dates=[date(2024, 3, 5), date(2024, 3, 8), date(2024, 3, 11)])
    mark_delivered(order_id, [date(2024, 3, 5)], now=now)

    schedule = get_delivery_schedule(order_id, now=now)

    assert schedule.total_deliveries == 3
    assert schedule.completed_deliveries == 1
    assert schedule.pending_deliveries == 2
    assert schedule.next_delivery_date == date(2024, 3, 8)
    assert schedule.can_pause is True
    assert schedule.pause_eligible_date == date(2024, 3, 8)
    data = schedule.to_dict()
    assert data['next_delivery_date'] == '2024-03-08'
    assert len(data['deliveries']) == 3


def test_delivery_schedule_cannot_pause_inside_notice_window(app, make_order):
    now = datetime(2024, 3, 4, 9, 0)
    order_id = make_order(dates=[date(2024, 3, 5), date(2024, 3, 6)])

    schedule = get_delivery_schedule(order_id, now=now)

    assert schedule.can_pause is False
    assert schedule.pause_eligible_date is None


def test_delivery_schedule_cannot_pause_after_pause_used(app, make_order):
    now = datetime(2024, 3, 4, 9, 0)
    order_id = make_order(dates=[date(2024, 3, 20)], pause_count=1)
    assert get_delivery_schedule(order_id, now=now).can_pause is False


def test_delivery_schedule_unknown_order(app):
    with pytest.raises(OrderNotFoundError):
        get_delivery_schedule(12345)


def test_mark_delivered_stamps_time(app, make_order):
    now = datetime(2024, 3, 5, 14, 30)
    order_id = make_order(dates=[date(2024, 3, 5), date(2024, 3, 6)])

    assert mark_delivered(order_id, [date(2024, 3, 5)], now=now) == 1

    delivery = Delivery.query.filter_by(order_id=order_id, scheduled_date=date(2024, 3, 5)).one()
    assert delivery.status == DELIVERY_DELIVERED
    assert delivery.delivered_at == now
    assert db.session.get(Order, order_id).status == ORDER_ACTIVE


def test_mark_last_delivery_completes_order(app, make_order):
    order_id = make_order(dates=[date(2024, 3, 5), date(2024, 3, 6)])
    mark_delivered(order_id, [date(2024, 3, 5)])
    mark_delivered(order_id, [date(2024, 3, 6)], status=DELIVERY_SKIPPED)

    assert db.session.get(Order, order_id).status == ORDER_COMPLETED


def test_mark_delivered_rejects_pending_status(app, make_order):
    order_id = make_order(dates=[date(2024, 3, 5)])
    with pytest.raises(ValueError):
        mark_delivered(order_id, [date(2024, 3, 5)], status=DELIVERY_PENDING)
