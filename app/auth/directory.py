"""Directory of host users handed to plugins"""
from app import db
from app.auth.user import User


class UserDirectory:
    """Resolves users by id and iterates over every known user"""

    def get(self, user_id):
        """Return the user with this id, or None"""
        if user_id is None:
            return None
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            return None
        return db.session.get(User, user_id)

    def __iter__(self):
        return iter(User.query.order_by(User.id).all())

    def __len__(self):
        return User.query.count()
