# helpdesk/__init__.py

from flask import Flask, jsonify, current_app
from flask_login import LoginManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect, CSRFError
from pymongo.errors import ConnectionFailure, ConfigurationError
import logging
from logging.handlers import RotatingFileHandler
from config import DevelopmentConfig, ProductionConfig, TestingConfig
from flask_pymongo import PyMongo
import os
import sys

# --- Instancias de Extensiones ---
login_manager = LoginManager()
mongo = PyMongo()
csrf = CSRFProtect()
limiter = Limiter(key_func=get_remote_address)


# --- Funciones Auxiliares para Modularizar la Configuración ---

def init_app_extensions(app):
    """
    Inicializa las extensiones de Flask y configura la conexión a la BD.
    """
    csrf.init_app(app)
    limiter.init_app(app)

    mongo_uri = app.config.get("MONGO_URI")
    if not mongo_uri:
        raise RuntimeError("FATAL: La variable de entorno MONGO_URI no está configurada.")

    app.logger.info("Intentando conectar a MongoDB...")

    try:
        mongo.init_app(app)
        mongo.cx.server_info() # Fuerza la conexión para verificarla
        app.logger.info("Conexión a MongoDB establecida exitosamente.")
    except (ConnectionFailure, ConfigurationError) as e:
        app.logger.error(f"Error al conectar o configurar MongoDB: {e}")
        raise RuntimeError(f"No se pudo conectar a la base de datos: {e}")

    login_manager.init_app(app)

    from helpdesk.auth.models import Persona
    from bson.objectid import ObjectId
    from bson.errors import InvalidId

    @login_manager.user_loader
    def load_user(user_id):
        try:
            user_data = mongo.db.personas.find_one({"_id": ObjectId(user_id)})
            if user_data:
                return Persona(**user_data)
        except InvalidId:
            app.logger.warning(f"load_user recibió un id inválido: {user_id}")
        except Exception as e:
            app.logger.error(f"Error en load_user para user_id {user_id}: {e}")
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"message": "Unauthorized"}), 401

def register_app_blueprints(app):
    """
    Registra todos los Blueprints de la aplicación.
    """
    from helpdesk.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')

    from helpdesk.dashboard import dashboard_bp
    app.register_blueprint(dashboard_bp, url_prefix='/api')

    from helpdesk.tickets import tickets_bp
    app.register_blueprint(tickets_bp, url_prefix='/api')

    from helpdesk.admin import admin_bp
    app.register_blueprint(admin_bp, url_prefix='/admin')

def configure_app_logging(app):
    """
    Configura el sistema de logging de la aplicación.
    """
    log_dir = app.config.get("LOG_DIR", "logs")
    if not os.path.exists(log_dir):
        os.mkdir(log_dir)

    for handler in app.logger.handlers[:]:
        app.logger.removeHandler(handler)

    file_handler = RotatingFileHandler(os.path.join(log_dir, "app.log"), maxBytes=10240, backupCount=10)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    if not app.debug and not app.testing:
        level = logging.INFO
    else:
        level = logging.DEBUG

    file_handler.setLevel(level)
    stream_handler.setLevel(level)
    app.logger.setLevel(level)
    app.logger.addHandler(file_handler)
    app.logger.addHandler(stream_handler)

    app.logger.info("Logging inicializado")

def register_app_error_handlers(app):
    """
    Registra los manejadores de errores HTTP globales.
    Todas las respuestas de error son JSON con la forma {"message": ...}.
    """
    @app.errorhandler(400)
    def bad_request_error(error):
        return jsonify({"message": "Solicitud inválida"}), 400

    @app.errorhandler(CSRFError)
    def csrf_error(error):
        return jsonify({"message": error.description}), 400

    @app.errorhandler(401)
    def unauthorized_error(error):
        return jsonify({"message": "Unauthorized"}), 401

    @app.errorhandler(403)
    def forbidden_access(error):
        return jsonify({"message": "No tienes permiso para acceder a este recurso"}), 403

    @app.errorhandler(404)
    def page_not_found_error(error):
        return jsonify({"message": "Recurso no encontrado"}), 404

    @app.errorhandler(429)
    def too_many_requests_error(error):
        return jsonify({"message": "Demasiadas solicitudes. Inténtalo más tarde."}), 429

    @app.errorhandler(500)
    def internal_server_error(error):
        current_app.logger.error(f"Internal Server Error: {error}", exc_info=True)
        return jsonify({"message": "Error interno del servidor"}), 500

# --- Función de Fábrica de Aplicación (create_app) ---
def create_app(config_class="development"):
    """
    Función de fábrica para crear y configurar la instancia de la aplicación Flask.
    """
    app = Flask(__name__)

    config_map = {
        'testing': TestingConfig,
        'production': ProductionConfig,
        'development': DevelopmentConfig
    }
    app.config.from_object(config_map.get(config_class, DevelopmentConfig))

    configure_app_logging(app)
    init_app_extensions(app)
    register_app_blueprints(app)
    register_app_error_handlers(app)

    from helpdesk import commands as commands
    app.cli.add_command(commands.init_db_data_command)

    return app
