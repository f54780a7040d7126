"""
Services Package

Exports all services for easy importing.
"""

from storefront.services.products import create_product, delete_product, list_products
from storefront.services.settings import (
    CONTACT_METHODS,
    ensure_default_settings,
    get_contact_method,
    get_contact_phone,
    get_contact_settings,
    normalize_contact_method,
    set_contact_method,
    set_contact_phone,
)
from storefront.services.uploads import delete_image, save_image

__all__ = [
    'CONTACT_METHODS',
    'create_product',
    'delete_image',
    'delete_product',
    'ensure_default_settings',
    'get_contact_method',
    'get_contact_phone',
    'get_contact_settings',
    'list_products',
    'normalize_contact_method',
    'save_image',
    'set_contact_method',
    'set_contact_phone',
]
