"""
Product Model
"""

from datetime import datetime

from storefront.extensions import db


class Product(db.Model):
    """Catalog entry shown on the public listing"""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    image = db.Column(db.String(255))  # public path, e.g. /uploads/1700000000000-chair.png
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Product {self.name}>'
