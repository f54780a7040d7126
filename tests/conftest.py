import pytest

from storefront import create_app
from storefront.config import TestConfig
from storefront.extensions import db


@pytest.fixture()
def app(tmp_path):
    class Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(Config)
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture()
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def login(client):
    def _login(username='root', password='s3cr3t'):
        return client.post('/admin/login', data={'username': username, 'password': password})
    return _login


@pytest.fixture()
def make_admin(app):
    """Create an admin account directly through the service."""
    from storefront.accounts import get_account_service

    def _make(username, password='pw', is_super_admin=False):
        with app.app_context():
            account = get_account_service().create_account(username, password, is_super_admin)
            return account.id
    return _make
