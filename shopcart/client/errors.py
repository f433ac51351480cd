"""
Errores del gateway del cliente.

Todos heredan de RequestFailed: quien llama puede atrapar un solo tipo y
mostrar `message`, o distinguir el caso concreto si le interesa.
"""

from typing import Dict, Optional, Type

DEFAULT_MESSAGE = "Request failed"


class RequestFailed(Exception):
    """Cualquier respuesta no exitosa o fallo de transporte."""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or DEFAULT_MESSAGE
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message, "status_code": self.status_code}


class ValidationFailed(RequestFailed):
    """Faltan campos obligatorios."""


class Unauthorized(RequestFailed):
    """Credencial ausente, inválida o vencida."""


class NotFound(RequestFailed):
    """Producto o ruta desconocidos."""


class Conflict(RequestFailed):
    """Registro duplicado."""


ERRORS_BY_STATUS: Dict[int, Type[RequestFailed]] = {
    400: ValidationFailed,
    401: Unauthorized,
    404: NotFound,
    409: Conflict,
}


def error_for_status(status_code: int, message: Optional[str] = None) -> RequestFailed:
    error_cls = ERRORS_BY_STATUS.get(status_code, RequestFailed)
    return error_cls(message, status_code=status_code)
