from .user import User, UserRole
from .booking import Booking, BookingStatus, PaymentStatus, PackageTier, ACTIVE_STATUSES, TERMINAL_STATUSES
from .audit_log import AuditLog, ActorType
from .availability import DayAvailability
