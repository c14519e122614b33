import pytest

from app import create_app, hooks
from app.plugins.plugin import Plugin, PluginStatus
from todo_list.plugin import ToDoListPlugin


@pytest.fixture()
def manager(app):
    return app.extensions['plugin_manager']


def test_todo_list_is_discovered_and_active(app):
    with app.app_context():
        plugin = Plugin.query.filter_by(slug='todo-list').one()

        assert plugin.status == PluginStatus.ACTIVE.value
        assert plugin.entry_point == 'todo_list.plugin:ToDoListPlugin'
        assert plugin.module_path == 'todo_list.plugin'
        assert plugin.module_attr == 'ToDoListPlugin'
        assert plugin.base_dir.endswith('todo_list')
        assert plugin.author is None
        assert plugin.homepage is None
        assert plugin.effective_config() == {'debug': False, 'id_length': 16}
        assert plugin.load() is ToDoListPlugin

    assert 'todo_list' in app.blueprints


def test_effective_config_overrides_defaults(app):
    with app.app_context():
        plugin = Plugin.query.filter_by(slug='todo-list').one()
        plugin.config = {'id_length': 24}

        assert plugin.effective_config() == {'debug': False, 'id_length': 24}


def test_plugin_not_enabled():
    app = create_app('testing', {'PLUGINS_ENABLED': []})

    with app.app_context():
        plugin = Plugin.query.filter_by(slug='todo-list').one()
        assert plugin.status == PluginStatus.INACTIVE.value
        assert hooks.handlers('ready') == []
        assert app.extensions['plugin_manager'].get_plugin_instance('todo-list') is None

    assert 'todo_list' not in app.blueprints


def test_deactivate_detaches_hooks(app, manager):
    with app.app_context():
        assert manager.deactivate_plugin('todo-list') is True

        assert Plugin.query.filter_by(slug='todo-list').one().status == PluginStatus.INACTIVE.value
        assert hooks.handlers('render_player_list') == []
        assert manager.get_plugin_instance('todo-list') is None


def test_activate_again(app, manager):
    with app.app_context():
        manager.deactivate_plugin('todo-list')

        assert manager.activate_plugin('todo-list') is True
        assert isinstance(manager.get_plugin_instance('todo-list'), ToDoListPlugin)


def test_unknown_plugin(app, manager):
    with app.app_context():
        assert manager.activate_plugin('nope') is False
        assert manager.deactivate_plugin('nope') is False
        assert manager.get_plugin_instance('nope') is None


def test_discover_missing_directory(app, manager, tmp_path):
    with app.app_context():
        assert manager.discover_plugins(str(tmp_path / 'missing')) == []


def test_load_broken_entry_point(app):
    with app.app_context():
        plugin = Plugin.register_plugin(
            name='Broken',
            slug='broken',
            version='0.1.0',
            entry_point='todo_list.plugin:DoesNotExist'
        )

        assert plugin.load() is None
        assert plugin.status == PluginStatus.ERROR.value


def test_plugins_cli(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['plugins', 'list'])
    assert 'To Do List (todo-list): active' in result.output

    result = runner.invoke(args=['plugins', 'discover'])
    assert 'To Do List (todo-list)' in result.output

    result = runner.invoke(args=['plugins', 'deactivate', 'todo-list'])
    assert "Plugin 'todo-list' deactivated successfully." in result.output

    result = runner.invoke(args=['plugins', 'activate', 'todo-list'])
    assert "Plugin 'todo-list' activated successfully." in result.output

    result = runner.invoke(args=['plugins', 'debug-plugin', 'todo-list'])
    assert 'SUCCESS: Plugin loaded successfully.' in result.output

    result = runner.invoke(args=['plugins', 'debug-plugin', 'nope'])
    assert "Plugin 'nope' not found." in result.output


def test_todos_cli(app, users):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['todos', 'create', str(users['alice']), 'Buy milk'])
    assert f"Todo 'Buy milk' created for user {users['alice']}." in result.output

    result = runner.invoke(args=['todos', 'list', '--user', str(users['alice'])])
    assert 'Found 1 todos:' in result.output
    assert '[ ]' in result.output
    todo_id = result.output.split('[ ] ')[1].split(':')[0]

    result = runner.invoke(args=['todos', 'done', todo_id])
    assert f"Todo '{todo_id}' updated." in result.output

    result = runner.invoke(args=['todos', 'rename', todo_id, 'Buy oat milk'])
    assert f"Todo '{todo_id}' updated." in result.output

    result = runner.invoke(args=['todos', 'list'])
    assert f'[x] {todo_id}: Buy oat milk (user {users["alice"]})' in result.output

    result = runner.invoke(args=['todos', 'delete', todo_id])
    assert f"Todo '{todo_id}' deleted." in result.output

    result = runner.invoke(args=['todos', 'delete', todo_id])
    assert f"Todo '{todo_id}' not found." in result.output

    result = runner.invoke(args=['todos', 'create', '9999', 'x'])
    assert 'User 9999 not found.' in result.output
