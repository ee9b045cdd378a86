# agrigrow/repos/address_repo.py
from sqlalchemy import select, update

from agrigrow.data.models.address import AddressModel
from agrigrow.repos.base import BaseRepo


class AddressRepo(BaseRepo):
    def get_owned(self, address_id: str, user_id: str) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.id == address_id,
                AddressModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def find_same(self, user_id: str, address: str, pincode: str) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.user_id == user_id,
                AddressModel.address == address,
                AddressModel.pincode == pincode,
            )
        ).scalars().first()

    def list_for_user(self, user_id: str) -> list[AddressModel]:
        return list(
            self.db.execute(
                select(AddressModel)
                .where(AddressModel.user_id == user_id)
                .order_by(AddressModel.is_default.desc(), AddressModel.created_at.asc())
            ).scalars().all()
        )

    def unset_defaults(self, user_id: str, except_id: str | None = None) -> int:
        stmt = update(AddressModel).where(AddressModel.user_id == user_id)
        if except_id:
            stmt = stmt.where(AddressModel.id != except_id)
        result = self.db.execute(
            stmt.values(is_default=False).execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def add(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.commit()
        self.db.refresh(address)
        return address

    def save(self, address: AddressModel) -> AddressModel:
        self.db.commit()
        self.db.refresh(address)
        return address
