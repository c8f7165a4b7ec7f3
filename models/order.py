"""
Order Model

Contains the Order model: a customer's meal subscription and the fields
the pause/resume workflow reads and writes.
"""

from datetime import datetime

from constants import ORDER_ACTIVE, DEFAULT_DELIVERY_DAYS
from .base import db


class Order(db.Model):
    """
    Subscription order.

    pause_count never goes above 1: a subscription can be paused once in
    its lifetime. version_id is bumped on every flush so two writers working
    from the same read cannot both commit.
    """
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    plan_id = db.Column(db.String(50), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default=ORDER_ACTIVE, index=True)

    # Pause tracking
    pause_count = db.Column(db.Integer, nullable=False, default=0)
    paused_at = db.Column(db.DateTime, nullable=True)
    pause_duration_days = db.Column(db.Integer, nullable=True)

    # Schedule
    start_date = db.Column(db.Date, nullable=True)
    total_weeks = db.Column(db.Integer, nullable=True)
    delivery_days = db.Column(db.String(100), nullable=False, default=','.join(DEFAULT_DELIVERY_DAYS))
    original_end_date = db.Column(db.Date, nullable=True)
    extended_end_date = db.Column(db.Date, nullable=True)

    total_amount = db.Column(db.Float, default=0.0)

    version_id = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    deliveries = db.relationship(
        'Delivery', backref='order', lazy=True,
        cascade='all, delete-orphan', order_by='Delivery.scheduled_date'
    )

    __table_args__ = (
        db.CheckConstraint('pause_count <= 1', name='single_pause'),
    )
    __mapper_args__ = {'version_id_col': version_id}

    @property
    def delivery_day_names(self):
        """Delivery weekdays as a list of lowercase names."""
        return [d.strip().lower() for d in (self.delivery_days or '').split(',') if d.strip()]

    def to_dict(self):
        return {
            'id': self.id,
            'plan_id': self.plan_id,
            'status': self.status,
            'pause_count': self.pause_count,
            'paused_at': self.paused_at.isoformat() if self.paused_at else None,
            'pause_duration_days': self.pause_duration_days,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'total_weeks': self.total_weeks,
            'delivery_days': self.delivery_day_names,
            'original_end_date': self.original_end_date.isoformat() if self.original_end_date else None,
            'extended_end_date': self.extended_end_date.isoformat() if self.extended_end_date else None,
            'total_amount': self.total_amount,
        }
