"""Small helpers shared by the host and its plugins"""
import copy
import secrets
import string

ID_ALPHABET = string.ascii_letters + string.digits


def random_id(length=16):
    """Generate a random alphanumeric identifier"""
    return ''.join(secrets.choice(ID_ALPHABET) for _ in range(length))


def merge_object(original, other):
    """Deep merge ``other`` into a copy of ``original``

    Nested dictionaries are merged key by key, any other value in ``other``
    replaces the one in ``original``.
    """
    merged = copy.deepcopy(original) if original else {}
    for key, value in other.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            merged[key] = merge_object(existing, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def get_property(obj, key):
    """Read a value from nested dictionaries using a dotted key path"""
    target = obj
    for part in key.split('.'):
        if not isinstance(target, dict) or part not in target:
            return None
        target = target[part]
    return target


def set_property(obj, key, value):
    """Write a value into nested dictionaries using a dotted key path"""
    *parents, last = key.split('.')
    target = obj
    for part in parents:
        if not isinstance(target.get(part), dict):
            target[part] = {}
        target = target[part]
    target[last] = value


def delete_property(obj, key):
    """Remove a value from nested dictionaries using a dotted key path

    Returns True when something was removed.
    """
    *parents, last = key.split('.')
    target = obj
    for part in parents:
        target = target.get(part) if isinstance(target, dict) else None
        if target is None:
            return False
    if not isinstance(target, dict) or last not in target:
        return False
    del target[last]
    return True
