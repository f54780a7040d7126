"""
Setting Model
"""

from storefront.extensions import db


class Setting(db.Model):
    """Site-wide key-value setting"""
    __tablename__ = 'settings'

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text)

    def __repr__(self):
        return f'<Setting {self.key}={self.value!r}>'
