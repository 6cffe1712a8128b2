# coop_api/models/coop_member.py

from coop_api.database import Base
from sqlalchemy import Column, String, Integer, TIMESTAMP
from sqlalchemy.sql import func

# Tabla de membresías; la administra el módulo de coops, aquí solo se lee
class CoopMember(Base):
    __tablename__ = "coop_members"

    id =        Column(Integer, primary_key=True, index=True)
    user_id =   Column(String(36), nullable=False, index=True)
    coop_id =   Column(String(36), nullable=False)
    joined_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
