"""Localization of UI strings for the host and plugins"""
from flask import current_app
import json
import logging
import os

from app.core.utils import get_property, merge_object

logger = logging.getLogger(__name__)


class Localization:
    """Translation table assembled from ``lang/<language>.json`` files"""

    def __init__(self, language='en'):
        self.language = language
        self.translations = {}

    def load_directory(self, base_dir):
        """Merge the language file found under ``base_dir/lang`` if any"""
        path = os.path.join(base_dir, 'lang', f'{self.language}.json')
        if not os.path.exists(path):
            logger.debug(f"No '{self.language}' translations in {base_dir}")
            return False

        with open(path, encoding='utf-8') as fh:
            self.translations = merge_object(self.translations, json.load(fh))
        logger.info(f"Loaded translations from {path}")
        return True

    def localize(self, key):
        """Translate a dotted key, falling back to the key itself"""
        value = get_property(self.translations, key)
        return value if isinstance(value, str) else key


def localize(key):
    """Translate a key with the current app's localization"""
    return current_app.extensions['i18n'].localize(key)
