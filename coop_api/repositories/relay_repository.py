# coop_api/repositories/relay_repository.py

from typing import Any, Iterable

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from coop_api.core import logger
from coop_api.core.errors import PairingCodeConflictError
from coop_api.models import Relay


class RelayRepository:

    def __init__(self, db: Session):
        self.db = db


    def get_relay_by_id_repository(self, relay_id: str) -> Relay | None:
        return self.db.query(Relay).filter(Relay.id == relay_id).first()

    def get_relay_by_pairing_code_repository(self, pairing_code: str) -> Relay | None:
        return self.db.query(Relay).filter(Relay.pairing_code == pairing_code).first()

    def relay_exists_repository(self, relay_id: str) -> bool:
        return self.db.query(Relay.id).filter(Relay.id == relay_id).first() is not None


    def create_relay_repository(self, new_relay: Relay) -> Relay:
        """
        Inserta un relay nuevo. Si el pairing_code ya existe lanza
        PairingCodeConflictError para que el coordinador pruebe otro código.
        """
        try:
            self.db.add(new_relay)
            self.db.commit()
            self.db.refresh(new_relay)
            logger.info(f"Relay {new_relay.id} creado con estado {new_relay.status}")
            return new_relay
        except IntegrityError as e:
            self.db.rollback()
            raise PairingCodeConflictError() from e
        except SQLAlchemyError as e:
            logger.error(f"No se pudo insertar el relay: {e}")
            self.db.rollback()
            raise


    def conditional_update_repository(self, criteria: Iterable[Any], patch: dict) -> list[str]:
        """
        UPDATE relays SET <patch> WHERE <criteria> RETURNING id, en una sola sentencia.

        Es la primitiva compare-and-swap del emparejamiento: leer, filtrar y
        escribir es indivisible para la base de datos, así que de dos escritores
        con el mismo filtro solo uno ve la fila. Devuelve los ids afectados
        (len() == filas afectadas); una lista vacía no es un error.
        """
        stmt = (
            update(Relay)
            .where(*criteria)
            .values(**patch)
            .returning(Relay.id)
            .execution_options(synchronize_session=False)
        )

        try:
            updated_ids = list(self.db.execute(stmt).scalars().all())
            self.db.commit()
            return updated_ids
        except IntegrityError as e:
            self.db.rollback()
            raise PairingCodeConflictError() from e
        except SQLAlchemyError as e:
            logger.error(f"Falló la actualización condicional de relays: {e}")
            self.db.rollback()
            raise
