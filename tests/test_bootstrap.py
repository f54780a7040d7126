from storefront import create_app
from storefront.accounts import get_account_repository, get_account_service
from storefront.config import TestConfig
from storefront.extensions import db


def file_config(tmp_path, password='s3cr3t'):
    class Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = 'sqlite:///' + str(tmp_path / 'instance' / 'storefront.db')
        UPLOAD_FOLDER = str(tmp_path / 'uploads')
        SUPER_ADMIN_PASSWORD = password
    return Config


def test_restart_keeps_existing_accounts(tmp_path):
    first = create_app(file_config(tmp_path))
    with first.app_context():
        get_account_service().create_account('alice', 'pw')
        root_digest = get_account_repository().find_by_username('root').password_hash
        db.engine.dispose()

    # A restart with a different configured password must not reset anything
    second = create_app(file_config(tmp_path, password='changed'))
    with second.app_context():
        repository = get_account_repository()
        assert [a.username for a in repository.list_all()] == ['root', 'alice']
        assert repository.find_by_username('root').password_hash == root_digest
        assert repository.count_super_admins() == 1
        db.engine.dispose()


def test_cli_seed_and_promote(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['seed-admin'])
    assert result.exit_code == 0
    assert 'nothing to do' in result.output

    result = runner.invoke(args=['create-admin', 'alice', '--password', 'pw'])
    assert result.exit_code == 0, result.output

    result = runner.invoke(args=['create-admin', 'alice', '--password', 'pw'])
    assert result.exit_code != 0
    assert 'Username already exists' in result.output

    result = runner.invoke(args=['promote-admin', 'alice'])
    assert result.exit_code == 0, result.output

    result = runner.invoke(args=['promote-admin', 'nobody'])
    assert result.exit_code != 0

    with app.app_context():
        assert get_account_repository().count_super_admins() == 2


def test_no_http_route_elevates_privileges(client):
    assert client.get('/fix-admin').status_code == 404
