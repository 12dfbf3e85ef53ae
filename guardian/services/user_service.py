from sqlalchemy.orm import Session

from guardian.models.user import User
from guardian.utils.errors import UserNotFoundError


class UserService:
    @staticmethod
    def ensure_user(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == int(user_id)).first()
        if not user:
            raise UserNotFoundError("User not found")
        return user
