"""User model.

Accounts are managed by the external auth provider; only the fields the
marketplace reads are stored here.
"""

from datetime import datetime
from vibehub import db


class User(db.Model):
    """Marketplace user (app creator, reviewer or moderator)."""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(80), nullable=True)
    avatar_url = db.Column(db.String(255), nullable=True)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    listings = db.relationship('Listing', back_populates='creator', lazy=True)

    def to_dict(self):
        """Convert user to the public dictionary shown next to listings."""
        return {
            'id': self.id,
            'username': self.username,
            'display_name': self.display_name,
            'avatar_url': self.avatar_url,
        }

    def __repr__(self):
        return f'<User {self.username}>'
