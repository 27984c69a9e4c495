from app.models.reservation import Reservation
from app.extensions import db

class ReservationRepo:
    @staticmethod
    def get(reservation_id: int):
        return db.session.get(Reservation, reservation_id)

    @staticmethod
    def list_all():
        return Reservation.query.order_by(Reservation.id.asc()).all()

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()

    @staticmethod
    def delete(reservation: Reservation):
        db.session.delete(reservation)
        db.session.commit()
