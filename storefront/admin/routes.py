"""
Admin Routes

Login/logout, the admin dashboard, product management and the contact
settings toggles.
"""

from flask import abort, flash, redirect, render_template, request, url_for
from flask_login import current_user

from storefront.admin import admin_bp
from storefront.admin.decorators import login_required, super_admin_required
from storefront.auth import get_session_manager
from storefront.errors import InvalidCredentials, InvalidUpload, NotFound, StoreUnavailable
from storefront.services import (
    create_product,
    delete_product,
    get_contact_settings,
    list_products,
    set_contact_method,
    set_contact_phone,
)


@admin_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login page."""
    if current_user.is_authenticated:
        return redirect(url_for('admin.index'))

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        if not username or not password:
            return render_template('admin/login.html', error='Please enter both username and password.')

        try:
            identity = get_session_manager().login(username, password)
        except InvalidCredentials as e:
            return render_template('admin/login.html', error=e.message)
        except StoreUnavailable:
            return render_template('admin/login.html', error='Unable to sign in right now. Please try again later.'), 503

        flash(f'Welcome, {identity.username}!', 'success')
        return redirect(url_for('admin.index'))

    return render_template('admin/login.html')


@admin_bp.route('/logout')
def logout():
    """Terminate the session; the old cookie no longer resolves to anyone."""
    get_session_manager().logout()
    flash('You have been logged out of the admin panel.', 'info')
    return redirect(url_for('admin.login'))


@admin_bp.route('')
@login_required
def index():
    """Admin dashboard with products and contact settings."""
    return render_template('admin/index.html',
                           products=list_products(),
                           username=current_user.username,
                           is_super_admin=current_user.is_super_admin,
                           **get_contact_settings())


@admin_bp.route('/contact-method', methods=['POST'])
@super_admin_required
def contact_method():
    method = set_contact_method(request.form.get('contactMethod'))
    flash(f'Contact method set to {method}.', 'success')
    return redirect(url_for('admin.index'))


@admin_bp.route('/contact-phone', methods=['POST'])
@super_admin_required
def contact_phone():
    set_contact_phone(request.form.get('contactPhone', ''))
    flash('Contact phone updated.', 'success')
    return redirect(url_for('admin.index'))


@admin_bp.route('/create')
@login_required
def create():
    return render_template('admin/create.html')


@admin_bp.route('/store', methods=['POST'])
@login_required
def store():
    """Create a product from the form, with an optional image."""
    try:
        create_product(request.form.get('name'),
                       request.form.get('description'),
                       request.files.get('image'))
    except (ValueError, InvalidUpload) as e:
        message = e.message if isinstance(e, InvalidUpload) else str(e)
        return render_template('admin/create.html', error=message,
                               name=request.form.get('name', ''),
                               description=request.form.get('description', '')), 400

    flash('Product created.', 'success')
    return redirect(url_for('admin.index'))


@admin_bp.route('/delete/<int:product_id>', methods=['POST'])
@login_required
def delete(product_id):
    """Delete a product and its image file."""
    try:
        delete_product(product_id)
    except NotFound:
        abort(404)
    flash('Product deleted.', 'success')
    return redirect(url_for('admin.index'))
