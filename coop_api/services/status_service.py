# coop_api/services/status_service.py

from datetime import datetime, timezone

import redis
from redis import Redis
from sqlalchemy import or_
from sqlalchemy.orm import Session

from coop_api.core import logger, settings
from coop_api.core.errors import InvalidRelayError, RelayNotFoundError
from coop_api.models import Relay, RelayStatus
from coop_api.repositories import RelayRepository
from coop_api.schemas import (
    PairingStatusResponse,
    RelayConfigResponse,
    RelayConfigByCodeResponse,
    RelayStatusResponse,
)

RELAY_CACHE_TTL = 3600
RELAY_MISS_CACHE_TTL = 300


def get_pairing_status_service(db: Session, pairing_code: str) -> PairingStatusResponse:
    """Consulta sin autenticación: el dispositivo pregunta si ya lo reclamaron."""
    relay = RelayRepository(db).get_relay_by_pairing_code_repository(pairing_code)

    if not relay:
        raise RelayNotFoundError("Código de emparejamiento no encontrado.")

    if relay.status != RelayStatus.CLAIMED.value:
        return PairingStatusResponse(status=RelayStatus.PENDING.value)

    return PairingStatusResponse(
        status=RelayStatus.CLAIMED.value,
        relay_id=relay.id,
        paired_at=relay.paired_at,
    )


def get_relay_config_service(db: Session, relay_id: str) -> RelayConfigResponse:
    """
    Configuración efectiva del relay. Si no existe o aún no está reclamado se
    devuelven valores por defecto en lugar de un error: el dispositivo siempre
    debe recibir algo utilizable.
    """
    relay = RelayRepository(db).get_relay_by_id_repository(relay_id)

    if not relay or not relay.is_claimed:
        return RelayConfigResponse(interval=settings.RELAY_DEFAULT_INTERVAL, rtsp_url=None)

    return RelayConfigResponse(
        interval=relay.interval or settings.RELAY_DEFAULT_INTERVAL,
        rtsp_url=relay.rtsp_url,
    )


def get_relay_config_by_code_service(db: Session, pairing_code: str) -> RelayConfigByCodeResponse:
    relay = RelayRepository(db).get_relay_by_pairing_code_repository(pairing_code)

    if not relay:
        raise RelayNotFoundError("No se encontró un relay con ese código de emparejamiento.")

    response = RelayConfigByCodeResponse(relay_id=relay.id, status=relay.status)

    if relay.status == RelayStatus.CLAIMED.value:
        # Antes de configurarse, el relay sondea con una cadencia más lenta
        response.coop_id = relay.coop_id
        response.rtsp_url = relay.rtsp_url
        response.interval = relay.interval or settings.RELAY_PAIRING_DEFAULT_INTERVAL

    return response


def get_relay_status_service(db: Session, relay_id: str) -> RelayStatusResponse:
    relay = RelayRepository(db).get_relay_by_id_repository(relay_id)

    if not relay:
        raise RelayNotFoundError()

    return RelayStatusResponse(
        relay_id=relay.id,
        status=relay.status,
        paired_at=relay.paired_at,
        last_seen_at=relay.last_seen_at,
        interval=relay.interval or settings.RELAY_DEFAULT_INTERVAL,
    )


def _relay_exists(db: Session, redis_client: Redis | None, relay_id: str) -> bool:
    # Los relays nunca se borran, así que cachear su existencia es seguro
    cache_key = f"relay:exists:{relay_id}"

    if redis_client is not None:
        try:
            cached = redis_client.get(cache_key)
            if cached is not None:
                return cached == "1"
        except redis.RedisError as e:
            logger.warning(f"⚠️ Redis no disponible para {cache_key}: {e}")
            redis_client = None

    exists = RelayRepository(db).relay_exists_repository(relay_id)

    if redis_client is not None:
        try:
            ttl = RELAY_CACHE_TTL if exists else RELAY_MISS_CACHE_TTL
            redis_client.setex(cache_key, ttl, "1" if exists else "0")
        except redis.RedisError as e:
            logger.warning(f"⚠️ No se pudo cachear {cache_key}: {e}")

    return exists


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def record_heartbeat_service(
    db: Session,
    relay_id: str,
    seen_at: datetime | None = None,
    redis_client: Redis | None = None,
) -> bool:
    """
    Registra last_seen_at para cualquier relay, reclamado o no.

    Gana la marca de tiempo más reciente aunque los heartbeats lleguen
    desordenados. Devuelve False cuando el heartbeat era más viejo que el
    registrado y no se aplicó.
    """
    if not _relay_exists(db, redis_client, relay_id):
        logger.warning(f"Heartbeat de un relay desconocido: {relay_id}")
        raise InvalidRelayError()

    seen_at = _as_utc(seen_at) if seen_at else datetime.now(timezone.utc)

    updated_ids = RelayRepository(db).conditional_update_repository(
        [
            Relay.id == relay_id,
            or_(Relay.last_seen_at.is_(None), Relay.last_seen_at < seen_at),
        ],
        {"last_seen_at": seen_at},
    )

    if not updated_ids:
        logger.debug(f"Heartbeat atrasado ignorado para el relay {relay_id}")
        return False

    return True
