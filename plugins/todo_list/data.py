"""The data layer for the To Do List plugin

A todo is a plain dict::

    {
        'id': 'a1B2c3D4e5F6g7H8',  # generated, never changes
        'label': 'Buy milk',
        'is_done': False,
        'owner_id': 1,             # user the todo belongs to
    }

Todos are stored in the owning user's flags under the ``todo-list`` scope,
keyed by todo id: ``{'todos': {todo_id: todo}}``.
"""
import logging

from app.core.utils import random_id

logger = logging.getLogger(__name__)

MODULE_ID = 'todo-list'

FLAGS = {
    'TODOS': 'todos',
}


class ToDoListData:
    """CRUD over todos kept in user flags

    ``directory`` resolves users by id (``get``) and iterates over every
    known user. Resolved users expose ``get_flag``, ``set_flag`` and
    ``unset_flag``. Every operation whose owner cannot be resolved does
    nothing and returns None.
    """

    def __init__(self, directory, id_factory=random_id, id_length=16):
        self.directory = directory
        self.id_factory = id_factory
        self.id_length = id_length

    def list_all_todos(self):
        """Get all todos for all users indexed by the todo's id

        Users are merged in directory order, so when two users hold the same
        todo id the one iterated last wins.
        """
        all_todos = {}
        for user in self.directory:
            all_todos.update(self.get_todos_for_user(user.id) or {})
        return all_todos

    def get_todos_for_user(self, user_id):
        """Gets all of a given user's todos, None if the user is unknown"""
        user = self.directory.get(user_id)
        if user is None:
            return None
        return user.get_flag(MODULE_ID, FLAGS['TODOS']) or {}

    def create_todo(self, user_id, todo_data):
        """Create a todo for a user

        The new todo replaces everything the user had stored: afterwards the
        user holds exactly this one todo. ``id`` and ``owner_id`` given in
        ``todo_data`` are ignored.
        """
        user = self.directory.get(user_id)
        if user is None:
            logger.debug(f"create_todo: user {user_id} not found")
            return None

        new_todo = {
            'is_done': False,
            **todo_data,
            'id': self.id_factory(self.id_length),
            'owner_id': user_id,
        }

        new_todos = {
            new_todo['id']: new_todo,
        }

        logger.debug(f"create_todo: {new_todo}")
        return user.set_flag(MODULE_ID, FLAGS['TODOS'], new_todos, replace=True)

    def update_todo(self, todo_id, update_data):
        """Updates a given todo with the provided data

        Only the given fields change; the flag storage merges the update into
        the stored todo and keeps its siblings.
        """
        relevant_todo = self.list_all_todos().get(todo_id)
        logger.debug(f"update_todo: {todo_id} -> {relevant_todo}")

        user = self._resolve_owner(relevant_todo)
        if user is None:
            return None

        update = {
            todo_id: update_data,
        }

        return user.set_flag(MODULE_ID, FLAGS['TODOS'], update)

    def delete_todo(self, todo_id):
        """Deletes a given todo, leaving the owner's other todos alone"""
        relevant_todo = self.list_all_todos().get(todo_id)

        user = self._resolve_owner(relevant_todo)
        if user is None:
            logger.debug(f"delete_todo: {todo_id} not found")
            return None

        return user.unset_flag(MODULE_ID, f"{FLAGS['TODOS']}.{todo_id}")

    def _resolve_owner(self, todo):
        if not isinstance(todo, dict):
            return None
        return self.directory.get(todo.get('owner_id'))

    def update_user_todos(self, user_id, update_data):
        """Replace all of a user's todos with ``update_data``"""
        user = self.directory.get(user_id)
        if user is None:
            logger.debug(f"update_user_todos: user {user_id} not found")
            return None

        return user.set_flag(MODULE_ID, FLAGS['TODOS'], update_data, replace=True)
