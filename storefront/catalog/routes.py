"""
Catalog Routes
"""

from flask import current_app, render_template, send_from_directory

from storefront.catalog import catalog_bp
from storefront.services import get_contact_settings, list_products


@catalog_bp.route('/')
def index():
    """Product listing with the configured contact method"""
    return render_template('catalog/products.html',
                           products=list_products(),
                           contact_email=current_app.config.get('CONTACT_EMAIL', ''),
                           **get_contact_settings())


@catalog_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
