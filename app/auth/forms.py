"""Forms for authentication"""
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Length

class LoginForm(FlaskForm):
    """Form for joining the game as a user"""
    username = StringField('Username', validators=[DataRequired(), Length(max=64)])
    password = PasswordField('Password')
    remember_me = BooleanField('Remember Me')
