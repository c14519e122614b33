"""To Do List plugin: a personal to-do list for every player"""

def setup():
    """Setup function called during plugin discovery"""
    return {
        'name': 'To Do List',
        'slug': 'todo-list',
        'version': '1.0.0',
        'description': 'A per-user to-do list stored in user flags',
        'entry_point': 'todo_list.plugin:ToDoListPlugin',
        'config_schema': {
            'type': 'object',
            'properties': {
                'debug': {
                    'type': 'boolean',
                    'title': 'Debug Logging',
                    'description': 'Log diagnostic messages of the plugin',
                    'default': False
                },
                'id_length': {
                    'type': 'integer',
                    'title': 'Todo Id Length',
                    'description': 'Number of characters in generated todo ids',
                    'minimum': 8,
                    'default': 16
                }
            }
        }
    }
