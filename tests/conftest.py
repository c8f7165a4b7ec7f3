"""
Shared fixtures: an app bound to in-memory SQLite and an order factory.
"""

import pytest

from app import create_app
from constants import ORDER_ACTIVE, DELIVERY_PENDING
from models import db, Order, Delivery
from services import default_pricing_config


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def pricing_config():
    return default_pricing_config()


@pytest.fixture
def make_order(app):
    """Create an order with pending deliveries on the given dates; returns its id."""
    def _make(dates=(), status=ORDER_ACTIVE, pause_count=0, plan_id='weight-loss', **fields):
        order = Order(plan_id=plan_id, status=status, pause_count=pause_count, **fields)
        db.session.add(order)
        db.session.flush()
        for day in dates:
            db.session.add(Delivery(order_id=order.id, scheduled_date=day, status=DELIVERY_PENDING))
        db.session.commit()
        return order.id
    return _make


def scheduled_dates(order_id):
    """Scheduled dates of an order's deliveries, earliest first."""
    rows = (Delivery.query
            .filter_by(order_id=order_id)
            .order_by(Delivery.scheduled_date, Delivery.id)
            .all())
    return [d.scheduled_date for d in rows]
