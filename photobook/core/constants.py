"""Common application-wide constants."""

import re

# Zero-padded 24-hour wall-clock time
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

# Audit actions for scheduling mutations
BOOKING_CREATED = "booking_created"
BOOKING_UPDATED = "booking_updated"
BOOKING_ASSIGNED = "booking_assigned"
BOOKING_STATUS_CHANGED = "booking_status_changed"
BOOKING_PAID = "booking_paid"
AVAILABILITY_SET = "availability_set"


__all__ = [
    "TIME_PATTERN",
    "BOOKING_CREATED",
    "BOOKING_UPDATED",
    "BOOKING_ASSIGNED",
    "BOOKING_STATUS_CHANGED",
    "BOOKING_PAID",
    "AVAILABILITY_SET",
]
