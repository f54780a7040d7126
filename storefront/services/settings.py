"""
Contact Settings

Key-value settings that control how visitors are invited to get in touch.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from storefront.errors import StoreUnavailable
from storefront.extensions import db
from storefront.models import Setting

logger = logging.getLogger(__name__)

CONTACT_METHOD = 'contact_method'
CONTACT_PHONE = 'contact_phone'

CONTACT_METHODS = ('email', 'sms')
DEFAULT_CONTACT_METHOD = 'email'

DEFAULTS = {
    CONTACT_METHOD: DEFAULT_CONTACT_METHOD,
    CONTACT_PHONE: '',
}


def normalize_contact_method(value):
    """Only an exact known method is kept; anything else falls back to email."""
    if value in CONTACT_METHODS:
        return value
    return DEFAULT_CONTACT_METHOD


def _get(key):
    try:
        row = db.session.get(Setting, key)
    except SQLAlchemyError as e:
        logger.exception('Could not read setting %s', key)
        raise StoreUnavailable() from e
    return row.value if row is not None else None


def _set(key, value):
    try:
        db.session.merge(Setting(key=key, value=value))
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Could not update setting %s', key)
        raise StoreUnavailable() from e


def ensure_default_settings():
    """Insert missing defaults without overwriting existing values."""
    created = []
    for key, value in DEFAULTS.items():
        if db.session.get(Setting, key) is None:
            db.session.add(Setting(key=key, value=value))
            created.append(key)
    if created:
        db.session.commit()
        logger.info('Created default settings: %s', ', '.join(created))


def get_contact_method():
    return normalize_contact_method(_get(CONTACT_METHOD))


def set_contact_method(value):
    method = normalize_contact_method(value)
    _set(CONTACT_METHOD, method)
    return method


def get_contact_phone():
    return _get(CONTACT_PHONE) or ''


def set_contact_phone(value):
    phone = (value or '').strip()
    _set(CONTACT_PHONE, phone)
    return phone


def get_contact_settings():
    return {
        'contact_method': get_contact_method(),
        'contact_phone': get_contact_phone(),
    }
