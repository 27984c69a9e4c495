from app.models.book import Book
from app.models.library import Library
from app.models.user import User
from app.models.borrow import Borrow
from app.models.available_copy import AvailableCopy
from app.models.reservation import Reservation

__all__ = ["Book", "Library", "User", "Borrow", "AvailableCopy", "Reservation"]
