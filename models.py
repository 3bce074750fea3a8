"""
Phishguard - Session User
Users are not stored anywhere: Flask-Login keeps the email in the
session cookie and the loader rebuilds the user from it.
"""
from flask_login import UserMixin


class User(UserMixin):
    def __init__(self, email):
        self.id = email
        self.email = email

    @property
    def display_name(self):
        return self.email.split('@', 1)[0]

    def __eq__(self, other):
        return isinstance(other, User) and other.id == self.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f'<User {self.email}>'
