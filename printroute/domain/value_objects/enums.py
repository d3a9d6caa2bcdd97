"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class OrderStatus(str, Enum):
    CREATED = "CREATED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    DELIVERED = "DELIVERED"


class AssignmentStatus(str, Enum):
    PENDING = "PENDING"
    PRINTING = "PRINTING"
    READY = "READY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class StaffRole(str, Enum):
    ADMIN = "ADMIN"
    PRINT_CENTER = "PRINT_CENTER"
