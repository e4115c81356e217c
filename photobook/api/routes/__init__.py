from . import admin, bookings, payments, photographers

__all__ = ["admin", "bookings", "payments", "photographers"]
