"""Authentication Blueprint"""
import logging
import re

from flask import Blueprint, render_template, redirect, url_for, flash, request, session
from flask_login import login_user, logout_user, login_required, current_user

from models import User

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MIN_PASSWORD_LENGTH = 6


def validate_credentials(email, password):
    """Returns list of failures; empty list means the credentials are acceptable."""
    errors = []
    if not email or not EMAIL_PATTERN.match(email):
        errors.append("Valid email required")
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return errors


def _safe_next(target):
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


def _sign_in(mode):
    if current_user.is_authenticated:
        return redirect(url_for('checker'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if validate_credentials(email, password):
            if mode == 'login':
                flash('Invalid credentials', 'danger')
            else:
                flash('Please fill all fields correctly.', 'danger')
            return render_template('auth/login.html', mode=mode, email=email)

        login_user(User(email))
        session.permanent = True
        logger.info("User signed in (%s)", mode)
        next_page = _safe_next(request.args.get('next'))
        return redirect(next_page or url_for('checker'))

    return render_template('auth/login.html', mode=mode)


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    return _sign_in('login')


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    return _sign_in('signup')


@auth_bp.route('/logout')
@login_required
def logout():
    logout_user()
    session.pop('last_activity', None)
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))
