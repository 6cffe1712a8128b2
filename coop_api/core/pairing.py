# coop_api/core/pairing.py

import random
from dataclasses import dataclass
from typing import Callable, TypeVar

from .errors import PairingCodeConflictError, PairingCapacityError
from .logger import logger

T = TypeVar("T")

# Sembrado una sola vez al arrancar el proceso
_process_rng = random.Random()


class PairingCodeGenerator:
    """
    Genera candidatos de código numérico de ancho fijo ("04213099").

    No necesita ser criptográfico: la unicidad la garantiza el índice único
    de la base de datos, no la imprevisibilidad del código.
    """

    def __init__(self, length: int = 8, rng: random.Random | None = None):
        if length < 1:
            raise ValueError("length debe ser positivo")
        self.length = length
        self._rng = rng or _process_rng

    def generate(self) -> str:
        return f"{self._rng.randrange(10 ** self.length):0{self.length}d}"


@dataclass
class RetryPolicy:
    """
    Reintenta solo ante las excepciones de `retry_on`; cualquier otra
    termina el bucle de inmediato. Agotar los intentos lanza `exhausted_error`.
    """

    max_attempts: int = 5
    retry_on: tuple[type[BaseException], ...] = (PairingCodeConflictError,)
    exhausted_error: type[Exception] = PairingCapacityError

    def run(self, operation: Callable[[int], T]) -> T:
        """Ejecuta `operation(attempt)` con attempt = 1..max_attempts."""
        for attempt in range(1, self.max_attempts + 1):
            try:
                return operation(attempt)
            except self.retry_on as e:
                logger.warning(f"⚠️ Intento {attempt}/{self.max_attempts} en conflicto: {e}")
                continue

        logger.error(f"❌ Se agotaron los {self.max_attempts} intentos")
        raise self.exhausted_error()
