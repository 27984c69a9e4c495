from datetime import datetime
from app.extensions import db

class Reservation(db.Model):
    __tablename__ = "reservations"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    available_copy_id = db.Column(db.Integer, db.ForeignKey("available_copies.id"), nullable=False, index=True)

    # 1 = next in line
    position = db.Column(db.Integer, nullable=False)

    # written only by the reservation batch, always together
    notification_sent = db.Column(db.Boolean, nullable=False, default=False)
    availability_date = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", backref="reservations")
    available_copy = db.relationship("AvailableCopy", backref="reservations")
