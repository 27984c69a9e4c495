from app.models.borrow import Borrow

class BorrowRepo:
    @staticmethod
    def list_all():
        return Borrow.query.order_by(Borrow.id.asc()).all()
