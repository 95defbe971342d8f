# helpdesk/auth/models.py

from werkzeug.security import generate_password_hash, check_password_hash
from flask_login import UserMixin
from helpdesk.models import Role


class Persona(UserMixin):
    """
    Persona que inicia sesión en la aplicación. El mismo documento de `personas`
    puede aparecer en un ticket como técnico asignado (userId) o como cliente (clientId).
    """
    def __init__(self, username, email, firstName, lastName, password="", _id=None, avatar=None, phone="", role=Role.CLIENT.value, password_hash=None, **kwargs):
        self.username = username
        self.email = email
        self.firstName = firstName
        self.lastName = lastName
        self.avatar = avatar
        self.phone = phone
        self.role = role

        # Flask-Login requiere que el atributo 'id' sea un string.
        self.id = str(_id) if _id else None

        if password_hash:
            self.password_hash = password_hash
        elif password:
            self.set_password(password)
        else:
            self.password_hash = None

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if self.password_hash:
            return check_password_hash(self.password_hash, password)
        return False

    def get_id(self):
        return self.id

    # --- MÉTODOS DE PROPIEDAD PARA ROLES ---
    @property
    def is_client(self):
        return self.role == Role.CLIENT.value

    def to_document(self):
        """Documento para insertar en la colección `personas`."""
        document = dict(self.__dict__)
        document.pop("id", None)
        return document

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "firstName": self.firstName,
            "lastName": self.lastName,
            "avatar": self.avatar,
            "phone": self.phone,
            "role": self.role,
        }

    def __repr__(self):
        return f"<Persona {self.firstName} {self.lastName} (Rol: {self.role})>"
