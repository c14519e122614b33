import os
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect
from flask_login import LoginManager
import datetime

from app.core.hooks import Hooks

# Initialize extensions
db = SQLAlchemy()
csrf = CSRFProtect()
hooks = Hooks()
login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Please log in to access this page'
login_manager.login_message_category = 'warning'

def create_app(config_name=None, config_overrides=None):
    """Application factory pattern for Flask app creation"""

    # Create and configure the app
    app = Flask(__name__)

    # Load configuration
    from app.core.config import config_by_name
    config_obj = config_by_name[config_name or os.getenv('FLASK_ENV', 'development')]
    app.config.from_object(config_obj)
    if config_overrides:
        app.config.update(config_overrides)
    config_obj.init_app(app)

    # Initialize extensions with app
    db.init_app(app)
    csrf.init_app(app)
    hooks.init_app(app)

    from app.core.i18n import Localization, localize
    app.extensions['i18n'] = Localization(app.config['LANGUAGE'])
    app.extensions['i18n'].load_directory(app.root_path)

    from app.plugins.plugin_manager import PluginManager
    plugin_manager = PluginManager(app)

    # Configure login manager
    from app.auth.user import User, AnonymousUser
    login_manager.anonymous_user = AnonymousUser
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Register context processors
    @app.context_processor
    def inject_now():
        return {'now': datetime.datetime.now()}

    @app.context_processor
    def inject_plugin_context():
        """Inject plugin menu items and localization into all templates"""
        return {
            'plugin_menu_items': plugin_manager.get_menu_items(),
            'localize': localize
        }

    # Register blueprints
    from app.core.views import main_bp
    from app.auth.views import auth_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)

    # Register CLI commands
    from app.plugins.commands import register_commands as register_plugin_commands
    from app.auth.commands import register_commands as register_user_commands
    register_plugin_commands(app)
    register_user_commands(app)

    # Register error handlers
    from app.core.error_handlers import register_handlers
    register_handlers(app)

    with app.app_context():
        from app.core.db import Database
        Database.create_all()

        try:
            plugin_manager.discover_plugins(app.config['PLUGINS_DIR'])
            for slug in app.config['PLUGINS_ENABLED']:
                plugin_manager.activate_plugin(slug)
            plugin_manager.load_active_plugins(app)
            app.logger.info("Plugin manager initialized successfully")
        except Exception as e:
            app.logger.error(f"Error initializing plugin manager: {str(e)}")
            raise

        # Core initialization is done and game data is available
        hooks.call_all('ready')

    return app
