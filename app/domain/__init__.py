from app.domain.records import (
    AvailableCopyRef,
    BookRef,
    BorrowRecord,
    LibraryRef,
    NotificationPayload,
    ReservationRecord,
    UserRef,
)

__all__ = [
    "AvailableCopyRef",
    "BookRef",
    "BorrowRecord",
    "LibraryRef",
    "NotificationPayload",
    "ReservationRecord",
    "UserRef",
]
