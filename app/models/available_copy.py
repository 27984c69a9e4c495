from app.extensions import db

class AvailableCopy(db.Model):
    __tablename__ = "available_copies"

    id = db.Column(db.Integer, primary_key=True)

    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)
    library_id = db.Column(db.Integer, db.ForeignKey("libraries.id"), nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False, default=0)

    book = db.relationship("Book", backref="available_copies")
    library = db.relationship("Library", backref="available_copies")
