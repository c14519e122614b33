"""Forms for the To Do List plugin"""
from flask_wtf import FlaskForm
from wtforms import BooleanField, FieldList, Form, FormField, HiddenField, StringField
from wtforms.validators import DataRequired, Length, StopValidation

def text_required(form, field):
    """Stop the chain when the value is not a string"""
    if not isinstance(field.data, str):
        raise StopValidation('Must be text.')

class ToDoForm(Form):
    """A single todo row"""

    id = HiddenField('Id')
    label = StringField('Label', validators=[DataRequired(), text_required, Length(max=255)])
    is_done = BooleanField('Done')

class ToDoListForm(FlaskForm):
    """Read-only list of a user's todos"""
    todos = FieldList(FormField(ToDoForm))

    @classmethod
    def from_todos(cls, todos):
        """Build the form from a ``{todo_id: todo}`` mapping"""
        rows = [
            {name: todo.get(name) for name in ('id', 'label', 'is_done')}
            for todo in todos.values()
            if isinstance(todo, dict)
        ]
        form = cls(data={'todos': rows})
        for entry in form.todos:
            for field in entry.form:
                field.render_kw = {'disabled': True}
        return form
