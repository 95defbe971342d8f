from functools import wraps
import logging

from bson.objectid import ObjectId
import pymongo
from pymongo.errors import PyMongoError

from helpdesk import mongo
from helpdesk.exceptions import DatabaseQueryError
from helpdesk.models import Status

logger = logging.getLogger(__name__)


def _wrap_query_errors(f):
    """Convierte cualquier PyMongoError en DatabaseQueryError."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"Error de MongoDB en {f.__qualname__}: {e}")
            raise DatabaseQueryError(original_exception=e) from e
    return decorated_function

# -----------------------------------------------
# INTERFACES DE REPOSITORIO
# -----------------------------------------------

class PersonRepository:
    """Define el contrato para operaciones de datos de personas."""
    def find_by_ids(self, person_ids):
        raise NotImplementedError

    def find_by_username_or_email(self, username_or_email):
        raise NotImplementedError

class TicketRepository:
    """Define el contrato para operaciones de datos de tickets."""
    def count(self, query=None):
        raise NotImplementedError

    def count_by(self, field):
        raise NotImplementedError

    def status_counts_by(self, field, exclude_null=False):
        raise NotImplementedError

    def find_recent(self, limit):
        raise NotImplementedError

    def find_by_id(self, ticket_id):
        raise NotImplementedError

    def find_filtered(self, query):
        raise NotImplementedError

# -----------------------------------------------
# IMPLEMENTACIONES MONGODB
# -----------------------------------------------

class MongoPersonRepository(PersonRepository):
    """Implementación concreta del repositorio de personas para PyMongo."""
    def __init__(self, db=None):
        self.db = db if db is not None else mongo.db

    @_wrap_query_errors
    def find_by_ids(self, person_ids):
        """Devuelve un dict {_id: documento} con las personas encontradas."""
        ids = list(person_ids)
        if not ids:
            return {}
        return {p["_id"]: p for p in self.db.personas.find({"_id": {"$in": ids}})}

    @_wrap_query_errors
    def find_by_username_or_email(self, username_or_email):
        return self.db.personas.find_one(
            {"$or": [{"username": username_or_email}, {"email": username_or_email}]}
        )

class MongoTicketRepository(TicketRepository):
    """Implementación concreta del repositorio de tickets para PyMongo."""
    def __init__(self, db=None):
        self.db = db if db is not None else mongo.db

    @_wrap_query_errors
    def count(self, query=None):
        return self.db.tickets.count_documents(query or {})

    @_wrap_query_errors
    def count_by(self, field):
        """Agrupa por el valor exacto de `field`: [{"_id": valor, "count": n}, ...]."""
        pipeline = [
            {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
        ]
        return list(self.db.tickets.aggregate(pipeline))

    @_wrap_query_errors
    def status_counts_by(self, field, exclude_null=False):
        """
        Agrupa por `field` y cuenta en una sola consulta el total, los cerrados
        (completed) y los abiertos (pending) de cada grupo.
        """
        pipeline = []
        if exclude_null:
            pipeline.append({"$match": {field: {"$ne": None}}})
        pipeline.append({
            "$group": {
                "_id": f"${field}",
                "total": {"$sum": 1},
                "completed": {"$sum": {"$cond": [{"$eq": ["$status", Status.CLOSED.value]}, 1, 0]}},
                "pending": {"$sum": {"$cond": [{"$eq": ["$status", Status.OPEN.value]}, 1, 0]}},
            }
        })
        return list(self.db.tickets.aggregate(pipeline))

    @_wrap_query_errors
    def find_recent(self, limit):
        return list(self.db.tickets.find().sort("createdAt", pymongo.DESCENDING).limit(limit))

    @_wrap_query_errors
    def find_by_id(self, ticket_id):
        if not isinstance(ticket_id, ObjectId):
            if not ObjectId.is_valid(ticket_id):
                return None
            ticket_id = ObjectId(ticket_id)
        return self.db.tickets.find_one({"_id": ticket_id})

    @_wrap_query_errors
    def find_filtered(self, query):
        return list(self.db.tickets.find(query).sort("createdAt", pymongo.DESCENDING))
