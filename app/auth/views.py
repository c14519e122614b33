"""Frontend routes for authentication"""
from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import login_user, logout_user, login_required, current_user
from app.auth.forms import LoginForm
from app.auth.user import User
import logging

logger = logging.getLogger(__name__)

# Create blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login page"""
    # Redirect if already logged in
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = LoginForm()
    if form.validate_on_submit():
        user = User.query.filter_by(username=form.username.data).first()

        if user is None or not user.verify_password(form.password.data):
            flash('Invalid username or password', 'danger')
            return render_template('auth/login.html', title='Login', form=form), 401

        if not user.is_active:
            flash('This account is inactive. Please contact the gamemaster.', 'warning')
            return render_template('auth/login.html', title='Login', form=form), 403

        # Log in user
        login_user(user, remember=form.remember_me.data)
        user.update_last_login()
        logger.info(f"User {user.username} logged in")

        # Redirect to next page if specified, otherwise to home
        next_page = request.args.get('next')
        if next_page and next_page.startswith('/'):
            return redirect(next_page)

        return redirect(url_for('main.index'))

    return render_template('auth/login.html', title='Login', form=form)

@auth_bp.route('/logout')
@login_required
def logout():
    """User logout"""
    logout_user()
    flash('You have been logged out', 'success')
    return redirect(url_for('auth.login'))
