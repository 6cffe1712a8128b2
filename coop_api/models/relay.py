# coop_api/models/relay.py

import enum
import uuid

from coop_api.database import Base
from sqlalchemy import Column, String, TIMESTAMP
from sqlalchemy.sql import func


class RelayStatus(str, enum.Enum):
    PENDING = "pending"
    CLAIMED = "claimed"


def _new_relay_id() -> str:
    return str(uuid.uuid4())


class Relay(Base):
    __tablename__ = "relays"

    id =            Column(String(36), primary_key=True, default=_new_relay_id)
    pairing_code =  Column(String(16), nullable=False, unique=True, index=True)
    status =        Column(String(16), nullable=False, default=RelayStatus.PENDING.value)
    coop_id =       Column(String(36), nullable=True)
    interval =      Column(String(16), nullable=True)
    rtsp_url =      Column(String(512), nullable=True)
    created_at =    Column(TIMESTAMP(timezone=True), server_default=func.now())
    paired_at =     Column(TIMESTAMP(timezone=True), nullable=True)
    last_seen_at =  Column(TIMESTAMP(timezone=True), nullable=True)

    @property
    def is_claimed(self) -> bool:
        return self.status == RelayStatus.CLAIMED.value and bool(self.coop_id)
