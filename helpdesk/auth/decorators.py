# helpdesk/auth/decorators.py

from functools import wraps
from flask import abort, current_app
from flask_login import current_user
import logging

logger = logging.getLogger(__name__)


def api_login_required(f):
    """
    Como login_required, pero para rutas JSON: sin sesión válida responde
    401 {"message": "Unauthorized"} y no ejecuta la vista.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return current_app.login_manager.unauthorized()
        return f(*args, **kwargs)

    return decorated_function


# Decorador general para requerir uno o varios roles
def role_required(roles):
    """
    Decorador que verifica si el usuario actual tiene alguno de los roles especificados.

    Uso:
    @role_required('admin')
    @role_required(['admin', 'tecnico'])
    """

    def decorator(f):
        @wraps(f)
        @api_login_required  # Asegura que el usuario esté logueado antes de comprobar el rol
        def decorated_function(*args, **kwargs):
            if isinstance(roles, str):
                allowed_roles = [roles]
            else:
                allowed_roles = roles

            if current_user.role not in allowed_roles:
                logger.warning(f'Acceso denegado a {current_user.username}: su rol es "{current_user.role}".')
                abort(403)
            return f(*args, **kwargs)

        return decorated_function

    return decorator


def admin_required(f):
    """Solo permite acceso a usuarios con el rol 'admin'."""
    return role_required("admin")(f)
