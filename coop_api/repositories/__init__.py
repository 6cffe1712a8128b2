# coop_api/repositories/__init__.py

from .relay_repository import RelayRepository
from .coop_member_repository import CoopMemberRepository
