"""To Do List plugin implementation"""
from flask import Blueprint, abort, jsonify, render_template, request, url_for
from flask.cli import with_appcontext
from flask_login import current_user
from markupsafe import escape
from app.auth.decorators import active_required, can_edit_user
from app.auth.directory import UserDirectory
from app.core.error_handlers import ApiError
from app.core.i18n import localize
import click
import logging

from todo_list.data import MODULE_ID, ToDoListData
from todo_list.forms import ToDoForm, ToDoListForm

logger = logging.getLogger(__name__)

BUTTON_TEMPLATE = (
    '<a class="todo-list-icon-button flex0" href="{url}" title="{tooltip}">'
    '<i class="fas fa-tasks"></i>'
    '</a>'
)


class ToDoListPlugin:
    """To Do List plugin class"""

    def __init__(self, config=None, directory=None):
        """Initialize the plugin with configuration"""
        self.config = config or {}
        self.data = ToDoListData(
            directory or UserDirectory(),
            id_length=self.config.get('id_length', 16)
        )
        self.blueprint = self._create_blueprint()

    def log(self, force, *args):
        """Log diagnostics when forced or when the debug setting is on"""
        if force or self.config.get('debug', False):
            logger.info(' '.join([MODULE_ID, '|'] + [str(arg) for arg in args]))

    # Hooks

    def register_hooks(self, hooks):
        hooks.on('ready', self.on_ready)
        hooks.on('render_player_list', self.on_render_player_list)

    def unregister_hooks(self, hooks):
        hooks.off('ready', self.on_ready)
        hooks.off('render_player_list', self.on_render_player_list)

    def on_ready(self):
        """Runs once core initialization is ready and game data is available"""
        self.log(True, 'ready, all todos:', self.data.list_all_todos())

    def on_render_player_list(self, player_list):
        """Add the to-do list button to the logged in user's row"""
        user_id = player_list.current_user_id
        if user_id is None:
            return

        button = BUTTON_TEMPLATE.format(
            url=url_for('todo_list.todo_list', user_id=user_id),
            tooltip=escape(localize('TODO_LIST.button_title'))
        )
        if not player_list.append(user_id, button):
            self.log(False, f'user {user_id} is not in the player list')

    # Views

    def _create_blueprint(self):
        """Create a Flask blueprint for the plugin"""
        bp = Blueprint(
            'todo_list',
            __name__,
            template_folder='templates',
            url_prefix='/plugins/todo-list'
        )

        @bp.route('/users/<int:user_id>')
        @active_required
        def todo_list(user_id):
            """To-do list of a user, opened from the player list button"""
            self.log(True, 'all todos:', self.data.list_all_todos())

            todos = self.data.get_todos_for_user(user_id)
            if todos is None:
                abort(404)

            return render_template('todo_list/todo_list.html',
                                   title=localize('TODO_LIST.title'),
                                   user_id=user_id,
                                   form=ToDoListForm.from_todos(todos))

        @bp.route('/todos', methods=['GET'])
        @active_required
        def get_all_todos():
            """Get the todos of every user"""
            return jsonify({
                'status': 'success',
                'data': self.data.list_all_todos()
            })

        @bp.route('/users/<int:user_id>/todos', methods=['GET'])
        @active_required
        def get_user_todos(user_id):
            """Get the todos of one user"""
            todos = self.data.get_todos_for_user(user_id)
            if todos is None:
                raise ApiError('User not found', 404)

            return jsonify({
                'status': 'success',
                'data': todos
            })

        @bp.route('/users/<int:user_id>/todos', methods=['POST'])
        @active_required
        def create_todo(user_id):
            """Create a todo, replacing the user's current todos"""
            self._check_can_edit(user_id)
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ApiError('Expected a mapping of fields', 400)

            form = ToDoForm(data=data)
            if not form.validate():
                raise ApiError('Invalid todo', 400, {'errors': form.errors})

            if self.data.create_todo(user_id, data) is None:
                raise ApiError('User not found', 404)

            return jsonify({
                'status': 'success',
                'message': 'Todo created successfully',
                'data': self.data.get_todos_for_user(user_id)
            }), 201

        @bp.route('/users/<int:user_id>/todos', methods=['PUT'])
        @active_required
        def replace_todos(user_id):
            """Replace all of a user's todos"""
            self._check_can_edit(user_id)
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ApiError('Expected a mapping of todos', 400)

            if self.data.update_user_todos(user_id, data) is None:
                raise ApiError('User not found', 404)

            return jsonify({
                'status': 'success',
                'message': 'Todos replaced successfully',
                'data': self.data.get_todos_for_user(user_id)
            })

        @bp.route('/todos/<todo_id>', methods=['PATCH'])
        @active_required
        def update_todo(todo_id):
            """Update a todo"""
            self._get_editable_todo(todo_id)
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ApiError('Expected a mapping of fields', 400)

            # Ids and ownership are fixed at creation
            readonly = sorted(set(data) & {'id', 'owner_id'})
            if readonly:
                raise ApiError('Read-only fields', 400, {'errors': {name: ['Cannot be changed.'] for name in readonly}})

            if self.data.update_todo(todo_id, data) is None:
                raise ApiError('Todo not found', 404)

            return jsonify({
                'status': 'success',
                'message': 'Todo updated successfully',
                'data': self.data.list_all_todos().get(todo_id)
            })

        @bp.route('/todos/<todo_id>', methods=['DELETE'])
        @active_required
        def delete_todo(todo_id):
            """Delete a todo"""
            self._get_editable_todo(todo_id)
            if self.data.delete_todo(todo_id) is None:
                raise ApiError('Todo not found', 404)

            return jsonify({
                'status': 'success',
                'message': 'Todo deleted successfully'
            })

        return bp

    def _check_can_edit(self, user_id):
        if not can_edit_user(user_id):
            raise ApiError('Not allowed to edit this user', 403)

    def _get_editable_todo(self, todo_id):
        todo = self.data.list_all_todos().get(todo_id)
        if not isinstance(todo, dict):
            raise ApiError('Todo not found', 404)
        self._check_can_edit(todo.get('owner_id'))
        return todo

    def get_blueprint(self):
        """Get the plugin's blueprint"""
        return self.blueprint

    def get_menu_items(self):
        """Get menu items for the sidebar"""
        if not current_user.is_authenticated:
            return []
        return [
            {
                'name': localize('TODO_LIST.title'),
                'url': url_for('todo_list.todo_list', user_id=current_user.id),
                'icon': 'tasks'
            }
        ]

    # CLI

    def get_cli(self):
        """Click group managing todos from the command line"""
        data = self.data

        @click.group('todos')
        def todos_cli():
            """To-do list commands."""
            pass

        @todos_cli.command('list')
        @click.option('--user', 'user_id', type=int, default=None, help='Only this user\'s todos.')
        @with_appcontext
        def list_todos(user_id):
            """List todos."""
            todos = data.list_all_todos() if user_id is None else data.get_todos_for_user(user_id)
            if todos is None:
                click.echo(f"User {user_id} not found.")
                return
            click.echo(f"Found {len(todos)} todos:")
            for todo in todos.values():
                if not isinstance(todo, dict):
                    continue
                mark = 'x' if todo.get('is_done') else ' '
                click.echo(f" [{mark}] {todo.get('id')}: {todo.get('label')} (user {todo.get('owner_id')})")

        @todos_cli.command('create')
        @click.argument('user_id', type=int)
        @click.argument('label')
        @with_appcontext
        def create_todo(user_id, label):
            """Create a todo, replacing the user's todos."""
            if data.create_todo(user_id, {'label': label}) is None:
                click.echo(f"User {user_id} not found.")
                return
            click.echo(f"Todo '{label}' created for user {user_id}.")

        @todos_cli.command('done')
        @click.argument('todo_id')
        @click.option('--undo', is_flag=True, help='Mark the todo as not done.')
        @with_appcontext
        def mark_done(todo_id, undo):
            """Mark a todo as done."""
            if data.update_todo(todo_id, {'is_done': not undo}) is None:
                click.echo(f"Todo '{todo_id}' not found.")
                return
            click.echo(f"Todo '{todo_id}' updated.")

        @todos_cli.command('rename')
        @click.argument('todo_id')
        @click.argument('label')
        @with_appcontext
        def rename_todo(todo_id, label):
            """Change the label of a todo."""
            if data.update_todo(todo_id, {'label': label}) is None:
                click.echo(f"Todo '{todo_id}' not found.")
                return
            click.echo(f"Todo '{todo_id}' updated.")

        @todos_cli.command('delete')
        @click.argument('todo_id')
        @with_appcontext
        def delete_todo(todo_id):
            """Delete a todo."""
            if data.delete_todo(todo_id) is None:
                click.echo(f"Todo '{todo_id}' not found.")
                return
            click.echo(f"Todo '{todo_id}' deleted.")

        return todos_cli
