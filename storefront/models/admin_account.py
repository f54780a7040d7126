"""
Admin Account Model
"""

from datetime import datetime

from storefront.extensions import db


class AdminAccount(db.Model):
    """Administrator allowed into the admin console"""
    __tablename__ = 'admin_users'

    id = db.Column(db.Integer, primary_key=True)
    # Uniqueness is enforced here as well as in AccountService so that two
    # concurrent creates cannot both succeed
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    is_super_admin = db.Column(db.Boolean, default=False, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<AdminAccount {self.username} super={self.is_super_admin}>'
