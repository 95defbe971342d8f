class BaseAppException(Exception):
    """Clase base para excepciones personalizadas de la aplicación."""
    pass

class DatabaseQueryError(BaseAppException):
    """Excepción para errores ocurridos durante una consulta a la base de datos."""
    def __init__(self, message="Error al ejecutar la consulta en la base de datos.", original_exception=None):
        super().__init__(message)
        self.original_exception = original_exception

class MetadataCatalogError(BaseAppException):
    """Un tipo de ticket no tiene entrada en el catálogo de metadatos."""
    def __init__(self, ticket_type, message=None):
        super().__init__(message or f"El tipo de ticket '{ticket_type}' no está configurado en el catálogo.")
        self.ticket_type = ticket_type

class InvalidRouteError(BaseAppException):
    """Selector de reporte desconocido."""
    def __init__(self, route, message="Invalid route"):
        super().__init__(message)
        self.route = route
