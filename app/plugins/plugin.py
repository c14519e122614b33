"""Plugin model and plugin management"""
from app import db
from app.core.db import BaseModel
from enum import Enum
import importlib
import logging
import os
import sys

logger = logging.getLogger(__name__)

class PluginStatus(Enum):
    """Plugin status enumeration"""
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    ERROR = 'error'
    PENDING = 'pending'

class Plugin(BaseModel):
    """Plugin model for registering available plugins"""
    __tablename__ = 'plugins'

    # Plugin identification
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(100), nullable=False, unique=True, index=True)
    version = db.Column(db.String(20), nullable=False)

    # Plugin details
    description = db.Column(db.Text, nullable=True)
    author = db.Column(db.String(100), nullable=True)
    homepage = db.Column(db.String(255), nullable=True)

    # Plugin configuration
    entry_point = db.Column(db.String(255), nullable=False)
    config_schema = db.Column(db.JSON, default=dict)
    config = db.Column(db.JSON, default=dict)
    base_dir = db.Column(db.String(255), nullable=True)

    # Plugin status
    status = db.Column(db.String(20), default=PluginStatus.PENDING.value)

    def __repr__(self):
        return f'<Plugin {self.name} v{self.version}>'

    @property
    def module_path(self):
        """Get the module path for the plugin"""
        return self.entry_point.split(':')[0] if ':' in self.entry_point else self.entry_point

    @property
    def module_attr(self):
        """Get the module attribute/function for the plugin"""
        return self.entry_point.split(':')[1] if ':' in self.entry_point else 'plugin'

    @property
    def is_active(self):
        return self.status == PluginStatus.ACTIVE.value

    def default_config(self):
        """Defaults declared by the config schema"""
        properties = (self.config_schema or {}).get('properties', {})
        return {
            name: prop['default']
            for name, prop in properties.items()
            if 'default' in prop
        }

    def effective_config(self):
        """Schema defaults overridden by the stored configuration"""
        config = self.default_config()
        config.update(self.config or {})
        return config

    def load(self):
        """Load the plugin class"""
        try:
            # The package lives in its plugins directory
            plugins_dir = os.path.dirname(self.base_dir) if self.base_dir else None
            if plugins_dir and plugins_dir not in sys.path:
                sys.path.insert(0, plugins_dir)
                logger.info(f"Added plugins directory to sys.path in load(): {plugins_dir}")

            logger.debug(f"Attempting to import module: {self.module_path}")
            module = importlib.import_module(self.module_path)

            # Get the plugin object/function
            if hasattr(module, self.module_attr):
                plugin_class = getattr(module, self.module_attr)
                logger.info(f"Successfully loaded plugin: {self.name}")
                return plugin_class
            else:
                logger.error(f"Plugin {self.name} doesn't have {self.module_attr} attribute")
                self.status = PluginStatus.ERROR.value
                db.session.commit()
                return None

        except Exception as e:
            logger.error(f"Failed to load plugin {self.name}: {str(e)}")
            self.status = PluginStatus.ERROR.value
            db.session.commit()
            return None

    @staticmethod
    def register_plugin(name, slug, version, entry_point, description=None,
                        author=None, homepage=None, config_schema=None, base_dir=None):
        """Register a new plugin or refresh an existing registration"""
        # Check if plugin already exists
        existing_plugin = Plugin.query.filter_by(slug=slug).first()
        if existing_plugin:
            # Update existing plugin
            existing_plugin.name = name
            existing_plugin.version = version
            existing_plugin.description = description
            existing_plugin.author = author
            existing_plugin.homepage = homepage
            existing_plugin.entry_point = entry_point
            existing_plugin.config_schema = config_schema or {}
            existing_plugin.base_dir = base_dir

            db.session.commit()
            logger.info(f"Updated plugin: {name} v{version}")
            return existing_plugin

        # Create new plugin
        plugin = Plugin(
            name=name,
            slug=slug,
            version=version,
            description=description,
            author=author,
            homepage=homepage,
            entry_point=entry_point,
            config_schema=config_schema or {},
            config={},
            base_dir=base_dir,
            status=PluginStatus.INACTIVE.value
        )

        try:
            db.session.add(plugin)
            db.session.commit()
            logger.info(f"Registered plugin: {name} v{version}")
            return plugin

        except Exception as e:
            db.session.rollback()
            logger.error(f"Error registering plugin {name}: {str(e)}")
            raise
