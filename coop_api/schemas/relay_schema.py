# coop_api/schemas/relay_schema.py

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

INTERVAL_PATTERN = r"^\d+[smh]$"


# --- Emparejamiento ---

class PairingCodeRequest(BaseModel):
    relay_id: str | None = None

    @field_validator("relay_id")
    @classmethod
    def blank_relay_id_is_none(cls, value: str | None) -> str | None:
        # El firmware manda "" cuando todavía no tiene id
        if value is not None and not value.strip():
            return None
        return value

class PairingCodeResponse(BaseModel):
    relay_id: str
    pairing_code: str
    status: Literal["pending"] = "pending"

class ClaimRelayRequest(BaseModel):
    pairing_code: str = Field(min_length=1, max_length=16)

class ClaimRelayResponse(BaseModel):
    relay_id: str
    status: Literal["claimed"] = "claimed"

class PairingStatusResponse(BaseModel):
    status: Literal["pending", "claimed"]
    relay_id: str | None = None
    paired_at: datetime | None = None


# --- Configuración ---

class RelayConfigResponse(BaseModel):
    interval: str | None
    rtsp_url: str | None = None

class RelayConfigByCodeResponse(BaseModel):
    relay_id: str
    status: Literal["pending", "claimed"]
    coop_id: str | None = None
    interval: str | None = None
    rtsp_url: str | None = None

class RelayConfigUpdate(BaseModel):
    relay_id: str = Field(min_length=1)
    interval: str = Field(pattern=INTERVAL_PATTERN, max_length=16)
    rtsp_url: str | None = Field(default=None, max_length=512)


# --- Estado / heartbeat ---

class RelayHeartbeat(BaseModel):
    relay_id: str = Field(min_length=1)
    seen_at: datetime | None = None

class RelayStatusResponse(BaseModel):
    relay_id: str
    status: Literal["pending", "claimed"]
    paired_at: datetime | None = None
    last_seen_at: datetime | None = None
    interval: str
