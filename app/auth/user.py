"""User model and per-user flag storage"""
from flask_login import UserMixin, AnonymousUserMixin
from sqlalchemy.orm.attributes import flag_modified
from werkzeug.security import generate_password_hash, check_password_hash
from app import db
from app.core.db import BaseModel, Database
from app.core.utils import delete_property, get_property, merge_object, set_property
from datetime import datetime
import copy
import logging

logger = logging.getLogger(__name__)

class User(UserMixin, BaseModel):
    """User model for authentication and plugin flag storage"""
    __tablename__ = 'users'

    # User identification
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256))

    # User profile
    display_name = db.Column(db.String(64))
    is_active = db.Column(db.Boolean, default=True)
    is_gamemaster = db.Column(db.Boolean, default=False)

    # User metadata
    last_login = db.Column(db.DateTime)

    # Plugin data, namespaced by plugin id: {scope: {key: value}}
    flags = db.Column(db.JSON, default=dict)

    def __repr__(self):
        return f'<User {self.username}>'

    @property
    def password(self):
        """Prevent password from being accessed"""
        raise AttributeError('password is not a readable attribute')

    @password.setter
    def password(self, password):
        """Set password hash"""
        self.password_hash = generate_password_hash(password) if password else None

    def verify_password(self, password):
        """Check if password matches, users without a password accept any"""
        if not self.password_hash:
            return True
        return check_password_hash(self.password_hash, password or '')

    @property
    def name(self):
        return self.display_name or self.username

    def get_flag(self, scope, key):
        """Read a flag value, ``key`` may be a dotted path"""
        scope_flags = (self.flags or {}).get(scope)
        if scope_flags is None:
            return None
        return copy.deepcopy(get_property(scope_flags, key))

    def set_flag(self, scope, key, value, replace=False):
        """Write a flag value

        Dictionaries are deep merged into what is already stored under the
        key unless ``replace`` is set, in which case the stored value is
        swapped out wholesale.
        """
        flags = copy.deepcopy(self.flags or {})
        scope_flags = flags.setdefault(scope, {})

        existing = get_property(scope_flags, key)
        if not replace and isinstance(existing, dict) and isinstance(value, dict):
            value = merge_object(existing, value)
        else:
            value = copy.deepcopy(value)
        set_property(scope_flags, key, value)

        self._save_flags(flags)
        logger.debug(f"Set flag {scope}.{key} for user {self.id} (replace={replace})")
        return self

    def unset_flag(self, scope, key):
        """Remove a flag value, ``key`` may be a dotted path"""
        flags = copy.deepcopy(self.flags or {})
        scope_flags = flags.get(scope)
        if scope_flags is None or not delete_property(scope_flags, key):
            logger.debug(f"Flag {scope}.{key} not set for user {self.id}")
            return self

        self._save_flags(flags)
        logger.debug(f"Unset flag {scope}.{key} for user {self.id}")
        return self

    def _save_flags(self, flags):
        with Database.get_session():
            self.flags = flags
            flag_modified(self, 'flags')

    @staticmethod
    def create_user(username, password=None, display_name=None, is_gamemaster=False):
        """Create a new user"""
        user = User(
            username=username,
            display_name=display_name,
            is_gamemaster=is_gamemaster,
            flags={}
        )
        user.password = password

        try:
            db.session.add(user)
            db.session.commit()
            logger.info(f"User created: {username}")
            return user
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating user: {str(e)}")
            raise

    def update_last_login(self):
        """Update last login timestamp"""
        self.last_login = datetime.utcnow()
        db.session.commit()

class AnonymousUser(AnonymousUserMixin):
    """Anonymous user class"""

    @property
    def is_gamemaster(self):
        """Anonymous users are not gamemasters"""
        return False
