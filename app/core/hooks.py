"""Named lifecycle hooks that plugins subscribe to"""
from flask import current_app
import logging
import traceback

logger = logging.getLogger(__name__)


class Hooks:
    """Flask extension holding hook handlers per application"""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Attach an empty handler registry to the app"""
        app.extensions['hooks'] = {}

    def _registry(self):
        return current_app.extensions['hooks']

    def on(self, event, fn):
        """Register a handler for an event"""
        self._registry().setdefault(event, []).append(fn)
        logger.debug(f"Registered hook handler {getattr(fn, '__qualname__', fn)} for '{event}'")
        return fn

    def off(self, event, fn):
        """Remove a handler, returns True if it was registered"""
        handlers = self._registry().get(event, [])
        if fn in handlers:
            handlers.remove(fn)
            return True
        return False

    def handlers(self, event):
        return list(self._registry().get(event, []))

    def call_all(self, event, *args):
        """Call every handler registered for an event

        A failing handler is logged and does not stop the others.
        """
        called = 0
        for fn in self.handlers(event):
            try:
                fn(*args)
                called += 1
            except Exception as e:
                logger.error(f"Error in '{event}' hook handler {getattr(fn, '__qualname__', fn)}: {str(e)}")
                logger.error(f"Traceback: {traceback.format_exc()}")
        return called
