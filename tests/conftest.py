import pytest

from app import create_app, db
from app.auth.user import User


@pytest.fixture()
def app():
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def users(app):
    """A gamemaster and two players, by username"""
    with app.app_context():
        created = [
            User.create_user('gm', is_gamemaster=True),
            User.create_user('alice', password='secret', display_name='Alice'),
            User.create_user('bob'),
        ]
        return {user.username: user.id for user in created}


@pytest.fixture()
def plugin(app):
    return app.extensions['plugin_manager'].get_plugin_instance('todo-list')


@pytest.fixture()
def login(client):
    """Log the test client in as a user id"""
    def _login(user_id):
        with client.session_transaction() as session:
            session['_user_id'] = str(user_id)
            session['_fresh'] = True
    return _login
