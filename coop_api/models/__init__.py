from .relay import Relay, RelayStatus
from .coop_member import CoopMember
