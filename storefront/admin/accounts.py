"""
Admin Account Routes

Super admins list, create and delete admin accounts. The last super admin
can never be deleted.
"""

from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user

from storefront.accounts import get_account_service
from storefront.admin import admin_bp
from storefront.admin.decorators import super_admin_required
from storefront.auth import get_session_manager
from storefront.errors import CannotDeleteLastSuperAdmin, DuplicateUsername, NotFound


@admin_bp.route('/users')
@super_admin_required
def users():
    return render_template('admin/users.html',
                           users=get_account_service().list_accounts(),
                           username=current_user.username,
                           error=request.args.get('error'))


@admin_bp.route('/users/create')
@super_admin_required
def create_user():
    return render_template('admin/create_user.html')


@admin_bp.route('/users/store', methods=['POST'])
@super_admin_required
def store_user():
    username = request.form.get('username', '').strip()
    password = request.form.get('password', '')
    is_super_admin = request.form.get('is_super_admin') == 'on'

    if not username or not password:
        return render_template('admin/create_user.html',
                               error='Username and password are required.',
                               form_username=username), 400

    try:
        get_account_service().create_account(username, password, is_super_admin)
    except DuplicateUsername as e:
        return render_template('admin/create_user.html', error=e.message, form_username=username), 409

    flash(f'Admin "{username}" created.', 'success')
    return redirect(url_for('admin.users'))


@admin_bp.route('/users/delete/<int:account_id>', methods=['POST'])
@super_admin_required
def delete_user(account_id):
    try:
        get_account_service().delete_account(account_id)
    except (CannotDeleteLastSuperAdmin, NotFound) as e:
        return redirect(url_for('admin.users', error=e.message))

    # Deleting your own account ends your session as well
    if str(account_id) == current_user.get_id():
        get_session_manager().logout()
        flash('Your account was deleted.', 'info')
        return redirect(url_for('admin.login'))

    flash('Admin deleted.', 'success')
    return redirect(url_for('admin.users'))
