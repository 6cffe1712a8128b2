import pytest

from coop_api.core.errors import PairingCodeConflictError
from coop_api.models import Relay, RelayStatus
from coop_api.repositories import CoopMemberRepository, RelayRepository

from conftest import COOP_ID, USER_ID


def _pending(code):
    return Relay(pairing_code=code, status=RelayStatus.PENDING.value)


def test_create_assigns_id(db):
    relay = RelayRepository(db).create_relay_repository(_pending("11111111"))
    assert relay.id
    assert relay.status == "pending"
    assert relay.coop_id is None


def test_duplicate_code_raises_conflict_and_keeps_session_usable(db):
    repo = RelayRepository(db)
    repo.create_relay_repository(_pending("11111111"))

    with pytest.raises(PairingCodeConflictError):
        repo.create_relay_repository(_pending("11111111"))

    # La sesión se revirtió y sigue sirviendo
    other = repo.create_relay_repository(_pending("22222222"))
    assert repo.get_relay_by_pairing_code_repository("22222222").id == other.id


def test_conditional_update_returns_affected_ids(db):
    repo = RelayRepository(db)
    relay = repo.create_relay_repository(_pending("11111111"))

    updated = repo.conditional_update_repository(
        [Relay.pairing_code == "11111111", Relay.status == "pending"],
        {"status": "claimed", "coop_id": COOP_ID},
    )

    assert updated == [relay.id]
    stored = repo.get_relay_by_id_repository(relay.id)
    assert stored.status == "claimed"
    assert stored.coop_id == COOP_ID


def test_conditional_update_with_no_match_touches_nothing(db):
    repo = RelayRepository(db)
    relay = repo.create_relay_repository(_pending("11111111"))

    updated = repo.conditional_update_repository(
        [Relay.pairing_code == "11111111", Relay.status == "claimed"],
        {"coop_id": COOP_ID},
    )

    assert updated == []
    assert repo.get_relay_by_id_repository(relay.id).coop_id is None


def test_conditional_update_code_collision_raises_conflict(db):
    repo = RelayRepository(db)
    repo.create_relay_repository(_pending("11111111"))
    second = repo.create_relay_repository(_pending("22222222"))

    with pytest.raises(PairingCodeConflictError):
        repo.conditional_update_repository([Relay.id == second.id], {"pairing_code": "11111111"})

    assert repo.get_relay_by_id_repository(second.id).pairing_code == "22222222"


def test_relay_exists(db):
    repo = RelayRepository(db)
    relay = repo.create_relay_repository(_pending("11111111"))
    assert repo.relay_exists_repository(relay.id)
    assert not repo.relay_exists_repository("missing")


def test_coop_lookup(db, coop_member):
    repo = CoopMemberRepository(db)
    assert repo.get_coop_id_by_user_repository(USER_ID) == COOP_ID
    assert repo.get_coop_id_by_user_repository("nobody") is None
