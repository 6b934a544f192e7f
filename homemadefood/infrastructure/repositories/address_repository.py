from typing import List

from sqlalchemy import desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from homemadefood.domain.models import Address, User
from homemadefood.interfaces.IAddressRepository import IAddressRepository


class PostgresAddressRepository(IAddressRepository):

    def __init__(self, session: Session):
        self.session = session

    def list_for_user(self, user_id: str) -> List[Address]:
        stmt = (
            select(Address)
            .where(Address.user_id == user_id)
            .order_by(desc(Address.is_default), desc(Address.created_at))
        )
        return list(self.session.scalars(stmt).all())

    def create_for_user(self, user_id: str, address: Address) -> Address:
        """Clear-then-insert as one unit per owner.

        The owner row is locked first so concurrent default creations for the same
        user queue behind each other. The partial unique index on
        (user_id) WHERE is_default rejects anything that still slips through.
        """
        try:
            self.session.execute(
                select(User.id).where(User.id == user_id).with_for_update()
            )
            if address.is_default:
                self.session.execute(
                    update(Address)
                    .where(Address.user_id == user_id, Address.is_default.is_(True))
                    .values(is_default=False)
                    .execution_options(synchronize_session="fetch")
                )
            address.user_id = user_id
            self.session.add(address)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(address)
        return address

    def exists_for_user(self, address_id: str, user_id: str) -> bool:
        stmt = select(Address.id).where(Address.id == address_id, Address.user_id == user_id)
        return self.session.scalar(stmt) is not None
