# coop_api/services/__init__.py

# Pairing Service
from .pairing_service import request_pairing_code_service

# Claim Service
from .claim_service import claim_relay_service

# Status Service
from .status_service import (
    get_pairing_status_service,
    get_relay_config_service,
    get_relay_config_by_code_service,
    get_relay_status_service,
    record_heartbeat_service,
)

# Relay Config Service
from .relay_config_service import update_relay_config_service
