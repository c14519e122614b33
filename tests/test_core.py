import os

import pytest
from flask import Flask

from app.core.hooks import Hooks
from app.core.i18n import Localization
from app.core.utils import delete_property, get_property, merge_object, random_id, set_property

PLUGIN_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'plugins', 'todo_list')


def test_random_id():
    first = random_id()

    assert len(first) == 16
    assert first.isalnum()
    assert len(random_id(8)) == 8
    assert first != random_id()


def test_merge_object_is_deep_and_does_not_mutate():
    original = {'a': {'x': 1, 'y': 2}, 'b': 1}

    merged = merge_object(original, {'a': {'y': 3}, 'c': [1]})

    assert merged == {'a': {'x': 1, 'y': 3}, 'b': 1, 'c': [1]}
    assert original == {'a': {'x': 1, 'y': 2}, 'b': 1}


def test_merge_object_replaces_non_dicts():
    assert merge_object({'a': {'x': 1}}, {'a': 'flat'}) == {'a': 'flat'}
    assert merge_object(None, {'a': 1}) == {'a': 1}


def test_dotted_properties():
    obj = {}

    set_property(obj, 'todos.a.label', 'A')
    assert obj == {'todos': {'a': {'label': 'A'}}}
    assert get_property(obj, 'todos.a') == {'label': 'A'}
    assert get_property(obj, 'todos.b.label') is None

    assert delete_property(obj, 'todos.a') is True
    assert delete_property(obj, 'todos.a') is False
    assert delete_property(obj, 'missing.a') is False
    assert obj == {'todos': {}}


@pytest.fixture()
def hook_app():
    flask_app = Flask(__name__)
    hooks = Hooks(flask_app)
    with flask_app.app_context():
        yield hooks


def test_hooks_call_handlers_in_order(hook_app):
    calls = []
    hook_app.on('ready', lambda: calls.append('first'))
    hook_app.on('ready', lambda: calls.append('second'))

    assert hook_app.call_all('ready') == 2
    assert calls == ['first', 'second']


def test_hooks_failing_handler_does_not_stop_others(hook_app, caplog):
    calls = []

    def broken(value):
        raise RuntimeError('boom')

    hook_app.on('render', broken)
    hook_app.on('render', calls.append)

    assert hook_app.call_all('render', 42) == 1
    assert calls == [42]
    assert 'boom' in caplog.text


def test_hooks_off(hook_app):
    calls = []
    hook_app.on('ready', calls.append)

    assert hook_app.off('ready', calls.append) is True
    assert hook_app.off('ready', calls.append) is False
    assert hook_app.call_all('ready', 1) == 0
    assert calls == []


def test_localization():
    i18n = Localization('en')

    assert i18n.load_directory(PLUGIN_DIR) is True
    assert i18n.localize('TODO_LIST.title') == 'To Do List'
    assert i18n.localize('TODO_LIST.missing') == 'TODO_LIST.missing'
    assert i18n.localize('TODO_LIST') == 'TODO_LIST'


def test_localization_missing_language():
    i18n = Localization('xx')

    assert i18n.load_directory(PLUGIN_DIR) is False
    assert i18n.localize('TODO_LIST.title') == 'TODO_LIST.title'


def test_http_errors_as_json(client):
    response = client.get('/nowhere', headers={'Accept': 'application/json'})

    assert response.status_code == 404
    assert response.get_json() == {'status': 'error', 'message': 'Resource not found', 'code': 404}


def test_http_errors_as_page(client):
    response = client.get('/nowhere')

    assert response.status_code == 404
    assert '<h1>404</h1>' in response.get_data(as_text=True)

    response = client.post('/health')

    assert response.status_code == 405
    assert 'Method Not Allowed' in response.get_data(as_text=True)
