"""Route protection utilities"""
from functools import wraps
from flask import redirect, url_for, flash, request
from flask_login import current_user


def active_required(f):
    """Decorator for requiring a logged in, active user account"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            flash('Please log in to access this page', 'warning')
            return redirect(url_for('auth.login', next=request.path))

        if not current_user.is_active:
            flash('Your account is inactive. Please contact the gamemaster.', 'warning')
            return redirect(url_for('auth.login'))

        return f(*args, **kwargs)
    return decorated_function

def can_edit_user(user_id):
    """Check if current user may change data owned by ``user_id``"""
    if not current_user.is_authenticated:
        return False

    # Gamemasters can edit every user
    if current_user.is_gamemaster:
        return True

    # Players can only edit themselves
    return str(current_user.id) == str(user_id)
