# freshbite/repos/address_repo.py
from datetime import datetime, timezone

from sqlalchemy import select, update, func, case

from freshbite.data.models.address import AddressModel
from freshbite.data.models.user import UserModel
from freshbite.repos.base_repo import BaseRepo


def owner_lock_statement(user_id: int):
    # blokada wiersza usera serializuje zmiany jego ksiazki adresow
    return select(UserModel.id).where(UserModel.id == user_id).with_for_update()


class AddressRepo(BaseRepo):
    def lock_owner(self, user_id: int):
        self.db.execute(owner_lock_statement(user_id))

    def _ordered(self, user_id: int):
        # default pierwszy, potem ostatnio aktualizowany (id rozstrzyga remisy)
        return (
            select(AddressModel)
            .where(AddressModel.user_id == user_id)
            .order_by(
                AddressModel.is_default.desc(),
                AddressModel.updated_at.desc(),
                AddressModel.id.desc(),
            )
        )

    def list_for_user(self, user_id: int) -> list[AddressModel]:
        return list(self.db.execute(self._ordered(user_id)).scalars().all())

    def get_primary(self, user_id: int) -> AddressModel | None:
        return self.db.execute(self._ordered(user_id).limit(1)).scalars().first()

    def get_owned(self, address_id: int, user_id: int) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.id == address_id,
                AddressModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def count_for_user(self, user_id: int) -> int:
        return self.db.execute(
            select(func.count(AddressModel.id)).where(AddressModel.user_id == user_id)
        ).scalar_one()

    def most_recent(self, user_id: int, exclude_id: int | None = None) -> AddressModel | None:
        stmt = select(AddressModel).where(AddressModel.user_id == user_id)
        if exclude_id is not None:
            stmt = stmt.where(AddressModel.id != exclude_id)
        stmt = stmt.order_by(AddressModel.updated_at.desc(), AddressModel.id.desc()).limit(1)
        return self.db.execute(stmt).scalars().first()

    def add_address(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.flush()
        return address

    def update_address(self, address: AddressModel, fields: dict) -> AddressModel:
        for name, value in fields.items():
            setattr(address, name, value)
        address.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return address

    def delete_address(self, address: AddressModel):
        self.db.delete(address)
        self.db.flush()

    def set_single_default(self, user_id: int, address_id: int):
        # jeden UPDATE: dokladnie ten adres ma flage, reszta usera nie
        flag = case((AddressModel.id == address_id, True), else_=False)
        self.db.execute(
            update(AddressModel)
            .where(AddressModel.user_id == user_id)
            .values(is_default=flag)
            .execution_options(synchronize_session="fetch")
        )
        self.db.flush()

