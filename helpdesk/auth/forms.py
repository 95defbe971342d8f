from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Length


class LoginForm(FlaskForm):
    username = StringField('Nombre de Usuario o Correo Electrónico', validators=[DataRequired(message="Este campo es obligatorio"), Length(max=120)])
    password = PasswordField('Contraseña', validators=[DataRequired(message="Este campo es obligatorio")])
    remember_me = BooleanField('Recordarme')
