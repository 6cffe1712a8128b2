# coop_api/services/pairing_service.py

from sqlalchemy.orm import Session

from coop_api.core import logger, settings
from coop_api.core.errors import RelayNotFoundError
from coop_api.core.pairing import PairingCodeGenerator, RetryPolicy
from coop_api.models import Relay, RelayStatus
from coop_api.repositories import RelayRepository
from coop_api.schemas import PairingCodeResponse


def request_pairing_code_service(
    db: Session,
    relay_id: str | None = None,
    generator: PairingCodeGenerator | None = None,
    policy: RetryPolicy | None = None,
) -> PairingCodeResponse:
    """
    Emite un código de emparejamiento.

    - Sin relay_id: inserta un relay nuevo en estado pending.
    - Con relay_id: rota el código de ese relay y abre una época nueva
      (status=pending, coop_id=None, paired_at=None).

    Las colisiones del código (índice único) se reintentan con un código
    nuevo según `policy`; agotar los intentos lanza PairingCapacityError.
    Un relay_id inexistente es RelayNotFoundError y no se reintenta.
    """
    generator = generator or PairingCodeGenerator(length=settings.PAIRING_CODE_LENGTH)
    policy = policy or RetryPolicy(max_attempts=settings.PAIRING_MAX_ATTEMPTS)
    relay_repo = RelayRepository(db)

    if relay_id is None:
        logger.info("Procesando solicitud de código para un relay nuevo.")

        def insert_new_relay(attempt: int) -> PairingCodeResponse:
            pairing_code = generator.generate()
            relay = relay_repo.create_relay_repository(
                Relay(pairing_code=pairing_code, status=RelayStatus.PENDING.value)
            )
            return PairingCodeResponse(relay_id=relay.id, pairing_code=relay.pairing_code)

        response = policy.run(insert_new_relay)
        logger.info(f"✅ Relay {response.relay_id} registrado, esperando ser reclamado")
        return response

    logger.info(f"Procesando solicitud de código para el relay existente {relay_id}")

    if not relay_repo.relay_exists_repository(relay_id):
        logger.warning(f"Se pidió un código para el relay inexistente {relay_id}")
        raise RelayNotFoundError()

    def rotate_pairing_code(attempt: int) -> PairingCodeResponse:
        pairing_code = generator.generate()
        updated_ids = relay_repo.conditional_update_repository(
            [Relay.id == relay_id],
            {
                "pairing_code": pairing_code,
                "status": RelayStatus.PENDING.value,
                "coop_id": None,
                "paired_at": None,
            },
        )
        if not updated_ids:
            raise RelayNotFoundError()
        return PairingCodeResponse(relay_id=updated_ids[0], pairing_code=pairing_code)

    response = policy.run(rotate_pairing_code)
    logger.info(f"🔄 Relay {relay_id} vuelve a pending con un código nuevo")
    return response
