"""
Delivery Model

Contains the Delivery model: one scheduled drop-off belonging to an order.
"""

from datetime import datetime, time

from constants import DELIVERY_PENDING
from .base import db


class Delivery(db.Model):
    """Scheduled delivery. Rows never move between orders."""
    __tablename__ = 'deliveries'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False, index=True)
    scheduled_date = db.Column(db.Date, nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default=DELIVERY_PENDING, index=True)
    delivered_at = db.Column(db.DateTime, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def scheduled_at(self):
        """Start of the scheduled day, used for notice-window comparisons."""
        return datetime.combine(self.scheduled_date, time.min)

    def to_dict(self):
        return {
            'id': self.id,
            'order_id': self.order_id,
            'scheduled_date': self.scheduled_date.isoformat(),
            'status': self.status,
            'delivered_at': self.delivered_at.isoformat() if self.delivered_at else None,
            'notes': self.notes,
        }
