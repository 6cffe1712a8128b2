# coop_api/services/claim_service.py

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from coop_api.core import logger
from coop_api.core.errors import NoCoopMembershipError, RelayNotClaimableError
from coop_api.models import Relay, RelayStatus
from coop_api.repositories import CoopMemberRepository, RelayRepository
from coop_api.schemas import ClaimRelayResponse


def claim_relay_service(db: Session, user_id: str, pairing_code: str) -> ClaimRelayResponse:
    """
    Vincula el relay pendiente con `pairing_code` al coop del usuario.

    El filtro status = pending en la misma sentencia UPDATE es lo que hace
    atómico el reclamo: ante reclamos concurrentes del mismo código solo uno
    encuentra la fila y los demás reciben RelayNotClaimableError.
    """
    coop_id = CoopMemberRepository(db).get_coop_id_by_user_repository(user_id)
    if not coop_id:
        logger.warning(f"Usuario {user_id} intentó reclamar un relay sin pertenecer a un coop")
        raise NoCoopMembershipError()

    claimed_ids = RelayRepository(db).conditional_update_repository(
        [
            Relay.pairing_code == pairing_code,
            Relay.status == RelayStatus.PENDING.value,
        ],
        {
            "status": RelayStatus.CLAIMED.value,
            "coop_id": coop_id,
            "paired_at": datetime.now(timezone.utc),
        },
    )

    if not claimed_ids:
        # No distinguimos código inexistente, ya reclamado o de otra época
        logger.info(f"No hay relay pendiente con el código {pairing_code}")
        raise RelayNotClaimableError()

    relay_id = claimed_ids[0]
    logger.info(f"🔗 Relay {relay_id} reclamado por el coop {coop_id} (usuario {user_id})")
    return ClaimRelayResponse(relay_id=relay_id)
