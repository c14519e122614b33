from contextlib import contextmanager
from app import db

class Database:
    """Database utility class for managing database sessions"""

    @staticmethod
    @contextmanager
    def get_session():
        """Context manager committing the Flask-SQLAlchemy session"""
        try:
            yield db.session
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def create_all():
        """Create every table known to the models"""
        db.create_all()

# Base model class
class BaseModel(db.Model):
    """Abstract base model with common fields"""
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(
        db.DateTime,
        default=db.func.current_timestamp(),
        onupdate=db.func.current_timestamp()
    )
