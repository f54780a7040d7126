import io
import os

from storefront.accounts import get_account_repository
from storefront.models import Product


def usernames(app):
    with app.app_context():
        return [a.username for a in get_account_repository().list_all()]


def test_catalog_is_public(client):
    r = client.get('/')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert 'Products' in body
    assert 'No products yet.' in body


def test_unauthenticated_redirects(client):
    r = client.get('/admin')
    assert r.status_code in (301, 302)
    assert '/admin/login' in r.headers['Location']


def test_login_and_dashboard(client, login):
    r = login()
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/admin')

    r = client.get('/admin')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert 'Welcome, root!' in body
    assert 'Manage admins' in body

    # Already logged in: the login page bounces to the dashboard
    r = client.get('/admin/login')
    assert r.status_code == 302


def test_failed_logins_look_the_same(client, login):
    wrong_password = login('root', 'nope')
    unknown_user = login('ghost', 'nope')

    assert wrong_password.status_code == unknown_user.status_code == 200
    assert 'Invalid credentials' in wrong_password.get_data(as_text=True)
    assert wrong_password.get_data() == unknown_user.get_data()
    assert client.get('/admin').status_code == 302


def test_login_requires_both_fields(client, login):
    r = login('root', '')
    assert r.status_code == 200
    assert 'Please enter both username and password.' in r.get_data(as_text=True)


def test_created_account_can_log_in(app, client, login):
    login()
    r = client.post('/admin/users/store', data={'username': 'dave', 'password': 'pw', 'is_super_admin': 'on'})
    assert r.status_code == 302
    client.get('/admin/logout')

    r = login('dave', 'pw')
    assert r.status_code == 302
    r = client.get('/admin/users')
    assert r.status_code == 200
    assert 'dave (you)' in r.get_data(as_text=True)


def test_create_duplicate_account(app, client, login):
    login()
    r = client.post('/admin/users/store', data={'username': 'root', 'password': 'other'})
    assert r.status_code == 409
    assert 'Username already exists' in r.get_data(as_text=True)
    assert usernames(app) == ['root']


def test_create_account_requires_fields(app, client, login):
    login()
    r = client.post('/admin/users/store', data={'username': '  ', 'password': 'pw'})
    assert r.status_code == 400
    assert usernames(app) == ['root']


def test_root_alice_scenario(app, client, login):
    login()
    client.post('/admin/users/store', data={'username': 'alice', 'password': 'pw'})

    with app.app_context():
        repository = get_account_repository()
        root_id = repository.find_by_username('root').id
        alice_id = repository.find_by_username('alice').id
        assert not repository.find_by_username('alice').is_super_admin

    r = client.post(f'/admin/users/delete/{root_id}')
    assert r.status_code == 302
    assert 'error=Cannot+delete+the+last+super+admin' in r.headers['Location'] \
        or 'error=Cannot%20delete%20the%20last%20super%20admin' in r.headers['Location']

    r = client.get(r.headers['Location'])
    assert 'Cannot delete the last super admin' in r.get_data(as_text=True)

    r = client.post(f'/admin/users/delete/{alice_id}')
    assert r.status_code == 302
    assert 'error' not in r.headers['Location']

    assert usernames(app) == ['root']


def test_delete_unknown_account(client, login):
    login()
    r = client.post('/admin/users/delete/9999')
    assert r.status_code == 302
    assert 'error=Account' in r.headers['Location']


def test_deleting_own_account_logs_out(app, client, login, make_admin):
    carol_id = make_admin('carol', is_super_admin=True)
    login('carol', 'pw')

    r = client.post(f'/admin/users/delete/{carol_id}')
    assert r.status_code == 302
    assert '/admin/login' in r.headers['Location']
    assert client.get('/admin').status_code == 302
    assert usernames(app) == ['root']


def test_contact_settings_flow(client, login):
    login()
    client.post('/admin/contact-method', data={'contactMethod': 'sms'})
    client.post('/admin/contact-phone', data={'contactPhone': '555-0100'})

    client.post('/admin/store', data={'name': 'Chair', 'description': 'Oak chair'})
    body = client.get('/').get_data(as_text=True)
    assert 'sms:555-0100' in body

    client.post('/admin/contact-method', data={'contactMethod': 'pager'})
    body = client.get('/').get_data(as_text=True)
    assert 'mailto:shop@example.com' in body


def test_product_with_image(app, client, login):
    login()
    r = client.post('/admin/store', data={
        'name': 'Lamp',
        'description': 'Brass lamp',
        'image': (io.BytesIO(b'\x89PNG fake'), 'my lamp.png', 'image/png'),
    }, content_type='multipart/form-data')
    assert r.status_code == 302

    with app.app_context():
        product = Product.query.filter_by(name='Lamp').one()
        product_id = product.id
        image = product.image
    assert image.startswith('/uploads/')
    assert image.endswith('-my_lamp.png')

    stored = os.path.join(app.config['UPLOAD_FOLDER'], image[len('/uploads/'):])
    assert os.path.exists(stored)
    assert client.get(image).status_code == 200
    assert image in client.get('/').get_data(as_text=True)

    r = client.post(f'/admin/delete/{product_id}')
    assert r.status_code == 302
    assert not os.path.exists(stored)
    with app.app_context():
        assert Product.query.count() == 0


def test_non_image_upload_rejected(app, client, login):
    login()
    r = client.post('/admin/store', data={
        'name': 'Script',
        'description': 'Not a picture',
        'image': (io.BytesIO(b'#!/bin/sh'), 'run.sh', 'text/x-shellscript'),
    }, content_type='multipart/form-data')
    assert r.status_code == 400
    assert 'Not an image!' in r.get_data(as_text=True)
    with app.app_context():
        assert Product.query.count() == 0


def test_product_requires_name_and_description(app, client, login):
    login()
    r = client.post('/admin/store', data={'name': 'Nameless', 'description': ''})
    assert r.status_code == 400
    with app.app_context():
        assert Product.query.count() == 0


def test_delete_missing_product(client, login):
    login()
    assert client.post('/admin/delete/12345').status_code == 404


def test_unknown_page(client):
    r = client.get('/no-such-page')
    assert r.status_code == 404
    assert '404 - Page Not Found' in r.get_data(as_text=True)


def test_catalog_lists_products_in_creation_order(client, login):
    login()
    for name in ('Chair', 'Table', 'Bench'):
        client.post('/admin/store', data={'name': name, 'description': f'{name} in oak'})

    body = client.get('/').get_data(as_text=True)
    assert body.index('Chair') < body.index('Table') < body.index('Bench')


def test_password_hashing_failure_renders_error_page(app, client, login, monkeypatch):
    from storefront.accounts import get_password_hasher
    from storefront.errors import PasswordHashingError

    login()
    with app.app_context():
        hasher = get_password_hasher()

    def broken_hash(password):
        raise PasswordHashingError()

    monkeypatch.setattr(hasher, 'hash', broken_hash)
    r = client.post('/admin/users/store', data={'username': 'erin', 'password': 'pw'})

    assert r.status_code == 500
    body = r.get_data(as_text=True)
    assert 'Could not process the password.' in body
    assert usernames(app) == ['root']
