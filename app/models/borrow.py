from datetime import datetime
from app.extensions import db

class Borrow(db.Model):
    __tablename__ = "borrows"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)
    library_id = db.Column(db.Integer, db.ForeignKey("libraries.id"), nullable=False, index=True)

    borrowed_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    due_date = db.Column(db.Date, nullable=False)

    # owned by the lending side, only read by the batch
    book_returned = db.Column(db.Boolean, nullable=False, default=False)

    user = db.relationship("User", backref="borrows")
    book = db.relationship("Book", backref="borrows")
    library = db.relationship("Library", backref="borrows")
