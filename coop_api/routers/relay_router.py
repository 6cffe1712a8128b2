# coop_api/routers/relay_router.py

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from redis import Redis
from sqlalchemy.orm import Session

from coop_api.core import TokenData, get_current_user
from coop_api.database import get_db, get_redis_client
from coop_api.schemas import (
    PairingCodeRequest,
    PairingCodeResponse,
    ClaimRelayRequest,
    ClaimRelayResponse,
    PairingStatusResponse,
    RelayConfigUpdate,
    RelayHeartbeat,
    RelayStatusResponse,
)
from coop_api.services import (
    request_pairing_code_service,
    claim_relay_service,
    get_pairing_status_service,
    get_relay_config_service,
    get_relay_config_by_code_service,
    get_relay_status_service,
    record_heartbeat_service,
    update_relay_config_service,
)

router = APIRouter(prefix="/relay", tags=["Relays"])


@router.post("/request_pairing_code", response_model=PairingCodeResponse)
def request_pairing_code_route(
    response: Response,
    request_data: PairingCodeRequest | None = Body(default=None),
    db: Session = Depends(get_db),
):
    """
    Endpoint público para el relay: pide un código de emparejamiento.
    Sin relay_id crea un relay nuevo (201); con relay_id lo re-empareja (200).
    """
    relay_id = request_data.relay_id if request_data else None
    pairing = request_pairing_code_service(db, relay_id=relay_id)
    response.status_code = status.HTTP_201_CREATED if relay_id is None else status.HTTP_200_OK
    return pairing

@router.post("/claim", response_model=ClaimRelayResponse)
def claim_relay_route(claim_data: ClaimRelayRequest, db: Session = Depends(get_db), current_user: TokenData = Depends(get_current_user)):
    return claim_relay_service(db, user_id=current_user.user_id, pairing_code=claim_data.pairing_code)

@router.get("/pairing", response_model=PairingStatusResponse, response_model_exclude_none=True)
def get_pairing_status_route(code: str = Query(min_length=1), db: Session = Depends(get_db)):
    return get_pairing_status_service(db, pairing_code=code)

@router.get("/config")
def get_relay_config_route(
    relay_id: str | None = None,
    pairing_code: str | None = None,
    db: Session = Depends(get_db),
):
    """
    Configuración para el dispositivo, por relay_id o por pairing_code.
    Por relay_id nunca falla: si no está reclamado devuelve valores por defecto.
    """
    if relay_id:
        return get_relay_config_service(db, relay_id=relay_id).model_dump(mode="json")
    if pairing_code:
        config = get_relay_config_by_code_service(db, pairing_code=pairing_code)
        # Los campos del reclamo solo aparecen una vez reclamado
        return config.model_dump(mode="json", exclude_none=True)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Falta el parámetro relay_id o pairing_code.")

@router.post("/config", status_code=status.HTTP_204_NO_CONTENT)
def update_relay_config_route(config_data: RelayConfigUpdate, db: Session = Depends(get_db), current_user: TokenData = Depends(get_current_user)):
    update_relay_config_service(db, user_id=current_user.user_id, config_data=config_data)

@router.post("/status", status_code=status.HTTP_204_NO_CONTENT)
def report_heartbeat_route(
    heartbeat: RelayHeartbeat,
    db: Session = Depends(get_db),
    redis_client: Redis | None = Depends(get_redis_client),
):
    record_heartbeat_service(db, relay_id=heartbeat.relay_id, seen_at=heartbeat.seen_at, redis_client=redis_client)

@router.get("/status/read", response_model=RelayStatusResponse)
def get_relay_status_route(relay_id: str = Query(min_length=1), db: Session = Depends(get_db)):
    return get_relay_status_service(db, relay_id=relay_id)
