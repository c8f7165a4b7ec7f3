"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .order import Order
from .delivery import Delivery

__all__ = [
    'db',
    'Order',
    'Delivery',
]
