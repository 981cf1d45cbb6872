# variant_engine/services/exceptions.py

class ServiceError(Exception):
    """Clase base para errores de la capa de servicio."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class DomainValidationError(ServiceError):
    """Entrada de dominio inválida."""
    pass


class ResourceNotFoundError(ServiceError):
    """Recurso no encontrado."""
    pass


class InvalidAttributeError(DomainValidationError):
    """Atributo con nombre o valores duplicados/vacíos; la generación se rechaza completa."""
    pass


class MalformedPatchError(DomainValidationError):
    """Cambio masivo o individual con valores negativos; no se aplica nada."""
    pass


class UnknownTargetError(ResourceNotFoundError):
    """Id de combinación inexistente en la lista actual."""

    def __init__(self, detail: str, missing_ids: set[str] | None = None):
        self.missing_ids = set(missing_ids or ())
        super().__init__(detail)
