from sqlalchemy.orm import Session
from coop_api.models import CoopMember

class CoopMemberRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_coop_id_by_user_repository(self, user_id: str) -> str | None:
        # Un usuario reclama en nombre de su primer (y único) coop
        membership = (
            self.db.query(CoopMember)
            .filter(CoopMember.user_id == user_id)
            .order_by(CoopMember.id)
            .first()
        )
        return membership.coop_id if membership else None
