import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from coop_api.core.errors import NoCoopMembershipError, RelayNotClaimableError
from coop_api.models import Relay
from coop_api.repositories import RelayRepository
from coop_api.services import claim_relay_service, request_pairing_code_service

from conftest import COOP_ID, USER_ID, SequenceGenerator


@pytest.fixture
def pending_relay(db):
    return request_pairing_code_service(db, generator=SequenceGenerator(["04213099"]))


def test_claim_binds_relay_to_callers_coop(db, coop_member, pending_relay):
    response = claim_relay_service(db, user_id=USER_ID, pairing_code="04213099")

    assert response.relay_id == pending_relay.relay_id
    assert response.status == "claimed"

    relay = RelayRepository(db).get_relay_by_id_repository(pending_relay.relay_id)
    assert relay.status == "claimed"
    assert relay.coop_id == COOP_ID
    assert relay.paired_at is not None


def test_user_without_coop_cannot_claim(db, pending_relay):
    with pytest.raises(NoCoopMembershipError):
        claim_relay_service(db, user_id="lonely-user", pairing_code="04213099")

    relay = RelayRepository(db).get_relay_by_id_repository(pending_relay.relay_id)
    assert relay.status == "pending"


def test_unknown_code_is_not_claimable(db, coop_member, pending_relay):
    with pytest.raises(RelayNotClaimableError):
        claim_relay_service(db, user_id=USER_ID, pairing_code="99999999")


def test_second_claim_of_same_code_is_not_claimable(db, coop_member, pending_relay):
    claim_relay_service(db, user_id=USER_ID, pairing_code="04213099")

    with pytest.raises(RelayNotClaimableError) as exc_info:
        claim_relay_service(db, user_id=USER_ID, pairing_code="04213099")

    # Misma respuesta que un código inexistente
    assert exc_info.value.detail == RelayNotClaimableError().detail


def test_superseded_code_is_not_claimable(db, coop_member, pending_relay):
    request_pairing_code_service(
        db, relay_id=pending_relay.relay_id, generator=SequenceGenerator(["55555555"])
    )

    with pytest.raises(RelayNotClaimableError):
        claim_relay_service(db, user_id=USER_ID, pairing_code="04213099")

    assert claim_relay_service(db, user_id=USER_ID, pairing_code="55555555").relay_id == pending_relay.relay_id


def test_concurrent_claims_have_exactly_one_winner(session_factory, db, coop_member, pending_relay):
    attempts = 8
    barrier = threading.Barrier(attempts)

    def attempt_claim(_):
        session = session_factory()
        try:
            barrier.wait(timeout=10)
            return claim_relay_service(session, user_id=USER_ID, pairing_code="04213099")
        except RelayNotClaimableError as e:
            return e
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=attempts) as pool:
        results = list(pool.map(attempt_claim, range(attempts)))

    wins = [r for r in results if not isinstance(r, RelayNotClaimableError)]
    losses = [r for r in results if isinstance(r, RelayNotClaimableError)]

    assert len(wins) == 1
    assert len(losses) == attempts - 1
    assert wins[0].relay_id == pending_relay.relay_id
    assert db.query(Relay).filter(Relay.status == "claimed").count() == 1
