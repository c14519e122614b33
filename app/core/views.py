from flask import Blueprint, render_template, redirect, url_for
from flask_login import current_user
from markupsafe import Markup
from app import hooks
from app.auth.decorators import active_required
from app.auth.user import User
main_bp = Blueprint('main', __name__)


class PlayerList:
    """Player list being rendered, plugins may append markup to a row"""

    def __init__(self, users, current_user_id=None):
        self.users = users
        self.current_user_id = current_user_id
        self.rows = {user.id: [] for user in users}

    def find(self, user_id):
        """Markup list of the row for ``user_id``, None if not listed"""
        return self.rows.get(user_id)

    def append(self, user_id, html):
        row = self.find(user_id)
        if row is None:
            return False
        row.append(Markup(html))
        return True

    def extras(self, user_id):
        return Markup('').join(self.rows.get(user_id, []))


@main_bp.route('/')
@active_required
def index():
    """Main application page"""
    return redirect(url_for('main.players'))

@main_bp.route('/players')
@active_required
def players():
    """List the players, letting plugins decorate each row"""
    users = User.query.filter_by(is_active=True).order_by(User.id).all()
    player_list = PlayerList(users, current_user_id=current_user.id)
    hooks.call_all('render_player_list', player_list)

    return render_template('players.html',
                           title='Players',
                           player_list=player_list)

@main_bp.route('/health')
def health_check():
    """Health check endpoint"""
    return {'status': 'ok', 'message': 'Service is running'}
