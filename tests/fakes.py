"""In-memory stand-ins for the host user directory"""
import copy

from app.core.utils import delete_property, get_property, merge_object, set_property


class FakeUser:
    """User handle keeping flags in a dict, with the host's merge rules"""

    def __init__(self, user_id):
        self.id = user_id
        self.flags = {}

    def get_flag(self, scope, key):
        return copy.deepcopy(get_property(self.flags.get(scope, {}), key))

    def set_flag(self, scope, key, value, replace=False):
        scope_flags = self.flags.setdefault(scope, {})
        existing = get_property(scope_flags, key)
        if not replace and isinstance(existing, dict) and isinstance(value, dict):
            value = merge_object(existing, value)
        set_property(scope_flags, key, copy.deepcopy(value))
        return self

    def unset_flag(self, scope, key):
        delete_property(self.flags.get(scope, {}), key)
        return self


class FakeDirectory:
    """Users iterated in the order their ids were given"""

    def __init__(self, *user_ids):
        self.users = {user_id: FakeUser(user_id) for user_id in user_ids}

    def get(self, user_id):
        return self.users.get(user_id)

    def __iter__(self):
        return iter(list(self.users.values()))
