# Relay Schemas
from .relay_schema import (
    PairingCodeRequest,
    PairingCodeResponse,
    ClaimRelayRequest,
    ClaimRelayResponse,
    PairingStatusResponse,
    RelayConfigResponse,
    RelayConfigByCodeResponse,
    RelayConfigUpdate,
    RelayHeartbeat,
    RelayStatusResponse,
)
