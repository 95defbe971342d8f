from flask import jsonify
from flask_login import login_user, logout_user, current_user
from flask_wtf.csrf import generate_csrf
import logging
from helpdesk import limiter
from helpdesk.auth import auth_bp
from helpdesk.auth.forms import LoginForm
from helpdesk.auth.models import Persona
from helpdesk.auth.decorators import api_login_required
from helpdesk.exceptions import DatabaseQueryError
from helpdesk.repositories import MongoPersonRepository

logger = logging.getLogger(__name__)


@auth_bp.route("/csrf-token", methods=["GET"])
def csrf_token():
    return jsonify({"csrfToken": generate_csrf()})


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("10 per minute")
def login():
    if current_user.is_authenticated:
        return jsonify({"message": "Ya has iniciado sesión", "user": current_user.to_dict()}), 200

    form = LoginForm()
    if not form.validate_on_submit():
        return jsonify({"message": "Datos de inicio de sesión inválidos", "errors": form.errors}), 400

    try:
        user_data = MongoPersonRepository().find_by_username_or_email(form.username.data)
    except DatabaseQueryError:
        logger.error(
            f"Error inesperado al intentar iniciar sesión con el usuario '{form.username.data}'",
            exc_info=True,
        )
        return jsonify({"message": "Ha ocurrido un error inesperado. Por favor, inténtalo de nuevo."}), 500

    user = Persona(**user_data) if user_data else None
    if user is None or not user.check_password(form.password.data):
        logger.warning(f"Intento de inicio de sesión fallido para '{form.username.data}'.")
        return jsonify({"message": "Usuario o contraseña incorrectos"}), 401

    login_user(user, remember=form.remember_me.data)
    logger.info(f"Usuario {user.username} inició sesión.")
    return jsonify({"message": "¡Bienvenido de nuevo!", "user": user.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
@api_login_required
def logout():
    logger.info(f"Usuario {current_user.username} cerró sesión.")
    logout_user()
    return jsonify({"message": "Has cerrado sesión correctamente."}), 200


@auth_bp.route("/me", methods=["GET"])
@api_login_required
def me():
    return jsonify(current_user.to_dict()), 200
