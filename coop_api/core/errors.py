# coop_api/core/errors.py

from fastapi import status


class CoopAPIError(Exception):
    """Error de dominio con su código HTTP asociado."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Error interno del servidor."

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class PairingCodeConflictError(CoopAPIError):
    # Violación de unicidad del pairing_code; la reintenta el coordinador
    status_code = status.HTTP_409_CONFLICT
    detail = "El código de emparejamiento ya está en uso."


class PairingCapacityError(CoopAPIError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "No se pudo generar un código de emparejamiento único. Intenta de nuevo más tarde."


class RelayNotFoundError(CoopAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Relay no encontrado."


class RelayNotClaimableError(CoopAPIError):
    # Código inexistente, ya reclamado o de una época anterior: misma respuesta
    status_code = status.HTTP_404_NOT_FOUND
    detail = "No se encontró un relay pendiente con ese código de emparejamiento."


class InvalidRelayError(CoopAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Relay no encontrado."


class NoCoopMembershipError(CoopAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "El usuario no pertenece a ningún coop."
