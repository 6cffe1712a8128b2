# coop_api/services/relay_config_service.py

from sqlalchemy.orm import Session

from coop_api.core import logger
from coop_api.core.errors import RelayNotFoundError
from coop_api.models import Relay, RelayStatus
from coop_api.repositories import CoopMemberRepository, RelayRepository
from coop_api.schemas import RelayConfigUpdate


def update_relay_config_service(db: Session, user_id: str, config_data: RelayConfigUpdate) -> None:
    relay_repo = RelayRepository(db)
    relay = relay_repo.get_relay_by_id_repository(config_data.relay_id)
    coop_id = CoopMemberRepository(db).get_coop_id_by_user_repository(user_id)

    # ¡Importante! Solo el coop que reclamó el relay puede configurarlo.
    if not relay or not coop_id or not relay.is_claimed or relay.coop_id != coop_id:
        logger.warning(f"Usuario {user_id} intentó configurar el relay {config_data.relay_id} sin permiso.")
        raise RelayNotFoundError()

    # Si el relay se re-emparejó entre la lectura y la escritura, no se toca
    updated_ids = relay_repo.conditional_update_repository(
        [
            Relay.id == relay.id,
            Relay.status == RelayStatus.CLAIMED.value,
            Relay.coop_id == coop_id,
        ],
        {"interval": config_data.interval, "rtsp_url": config_data.rtsp_url},
    )

    if not updated_ids:
        logger.warning(f"El relay {config_data.relay_id} cambió de época antes de configurarse")
        raise RelayNotFoundError()

    logger.info(f"⚙️ Relay {relay.id} configurado: interval={config_data.interval}")
