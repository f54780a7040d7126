"""
Models Package

Exports all models for easy importing.
"""

from storefront.models.admin_account import AdminAccount
from storefront.models.product import Product
from storefront.models.setting import Setting

__all__ = ['AdminAccount', 'Product', 'Setting']
