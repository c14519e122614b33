"""Plugin discovery, registration, and lifecycle management"""
from flask import current_app
from app import db, hooks
from app.plugins.plugin import Plugin, PluginStatus
import importlib
import logging
import os
import sys
import traceback

logger = logging.getLogger(__name__)

class PluginManager:
    """Manages plugin discovery, registration, and lifecycle"""

    def __init__(self, app=None):
        """Initialize the plugin manager"""
        self.plugin_instances = {}
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.extensions['plugin_manager'] = self

    def discover_plugins(self, plugins_dir='plugins'):
        """Discover plugins in the specified directory"""
        # Get absolute path to plugins directory
        if not os.path.isabs(plugins_dir):
            base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
            plugins_dir = os.path.join(base_dir, plugins_dir)

        logger.info(f"Discovering plugins in {plugins_dir}")

        # Check if directory exists
        if not os.path.exists(plugins_dir):
            logger.error(f"Plugins directory does not exist: {plugins_dir}")
            return []

        # Add plugins directory to Python path if not already there
        if plugins_dir not in sys.path:
            sys.path.insert(0, plugins_dir)
            logger.info(f"Added {plugins_dir} to Python path")

        discovered = []
        for item in sorted(os.listdir(plugins_dir)):
            item_path = os.path.join(plugins_dir, item)

            # Check if it's a directory (plugin package)
            if not (os.path.isdir(item_path) and os.path.exists(os.path.join(item_path, '__init__.py'))):
                continue

            try:
                logger.debug(f"Found potential plugin package: {item}")
                plugin_module = importlib.import_module(item)

                if not hasattr(plugin_module, 'setup'):
                    logger.warning(f"Module {item} does not have a setup function")
                    continue

                metadata = plugin_module.setup()
                if not metadata:
                    logger.warning(f"Plugin {item} setup() function returned no metadata")
                    continue

                discovered.append(metadata)

                # Register or update the plugin
                Plugin.register_plugin(
                    name=metadata.get('name', item),
                    slug=metadata.get('slug', item.lower()),
                    version=metadata.get('version', '0.1.0'),
                    entry_point=metadata.get('entry_point', f"{item}:plugin"),
                    description=metadata.get('description'),
                    author=metadata.get('author'),
                    homepage=metadata.get('homepage'),
                    config_schema=metadata.get('config_schema'),
                    base_dir=item_path
                )
                logger.info(f"Successfully registered plugin: {metadata.get('name', item)}")

            except Exception as e:
                logger.error(f"Error loading plugin {item}: {str(e)}")
                logger.error(f"Traceback: {traceback.format_exc()}")

        logger.info(f"Discovered {len(discovered)} plugins")
        return discovered

    def activate_plugin(self, plugin_slug):
        """Activate a plugin, it is mounted on the next application start"""
        plugin = Plugin.query.filter_by(slug=plugin_slug).first()
        if not plugin:
            logger.error(f"Plugin {plugin_slug} not found")
            return False

        if plugin.is_active:
            return True

        logger.info(f"Activating plugin {plugin_slug}. Current status: {plugin.status}")

        # Test that we can load the plugin first
        plugin_class = plugin.load()
        if not plugin_class:
            logger.error(f"Failed to load plugin {plugin_slug}")
            return False

        try:
            plugin.status = PluginStatus.ACTIVE.value
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error activating plugin {plugin_slug}: {str(e)}")
            return False

        logger.info(f"Activated plugin: {plugin.name}")
        return True

    def deactivate_plugin(self, plugin_slug):
        """Deactivate a plugin and detach its hook handlers"""
        plugin = Plugin.query.filter_by(slug=plugin_slug).first()
        if not plugin:
            logger.error(f"Plugin {plugin_slug} not found")
            return False

        try:
            plugin.status = PluginStatus.INACTIVE.value
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error deactivating plugin {plugin_slug}: {str(e)}")
            return False

        # Flask can't unregister blueprints, only the hooks go away
        instance = self.plugin_instances.pop(plugin_slug, None)
        if instance is not None and hasattr(instance, 'unregister_hooks'):
            instance.unregister_hooks(hooks)

        logger.info(f"Deactivated plugin: {plugin.name}")
        return True

    def get_plugin_instance(self, plugin_slug):
        """Get the instance of an active plugin"""
        if plugin_slug in self.plugin_instances:
            return self.plugin_instances[plugin_slug]

        plugin = Plugin.query.filter_by(slug=plugin_slug).first()
        if not plugin:
            logger.error(f"Plugin {plugin_slug} not found")
            return None

        if not plugin.is_active:
            logger.error(f"Plugin {plugin_slug} is not active. Current status: {plugin.status}")
            return None

        plugin_class = plugin.load()
        if not plugin_class:
            return None

        try:
            instance = plugin_class(plugin.effective_config())
            self.plugin_instances[plugin_slug] = instance
            return instance
        except Exception as e:
            logger.error(f"Error instantiating plugin {plugin_slug}: {str(e)}")
            logger.error(f"Traceback: {traceback.format_exc()}")
            return None

    def get_active_plugins(self):
        return Plugin.query.filter_by(status=PluginStatus.ACTIVE.value).order_by(Plugin.id).all()

    def load_active_plugins(self, app):
        """Mount every active plugin on the app

        Registers blueprints, hook handlers, CLI commands and translations.
        """
        for plugin in self.get_active_plugins():
            instance = self.get_plugin_instance(plugin.slug)
            if instance is None:
                continue

            try:
                if hasattr(instance, 'get_blueprint'):
                    blueprint = instance.get_blueprint()
                    if blueprint and blueprint.name not in app.blueprints:
                        app.register_blueprint(blueprint)
                        app.logger.info(f"Registered blueprint for plugin {plugin.slug}")

                if hasattr(instance, 'register_hooks'):
                    instance.register_hooks(hooks)

                if hasattr(instance, 'get_cli'):
                    app.cli.add_command(instance.get_cli())

                if plugin.base_dir:
                    app.extensions['i18n'].load_directory(plugin.base_dir)
            except Exception as e:
                app.logger.error(f"Error mounting plugin {plugin.slug}: {str(e)}")
                app.logger.error(traceback.format_exc())

    def get_menu_items(self):
        """Get menu items for all active plugins"""
        menu_items = []
        for slug, instance in self.plugin_instances.items():
            if hasattr(instance, 'get_menu_items'):
                try:
                    items = instance.get_menu_items()
                    if items:
                        menu_items.extend(items)
                except Exception as e:
                    logger.error(f"Error getting menu items for plugin {slug}: {str(e)}")
        return menu_items


def get_plugin_manager():
    """Plugin manager of the current app"""
    return current_app.extensions['plugin_manager']
