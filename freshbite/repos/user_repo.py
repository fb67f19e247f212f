from sqlalchemy import select, or_

from freshbite.data.models.user import UserModel
from freshbite.repos.base_repo import BaseRepo


class UserRepo(BaseRepo):
    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def exists(self, username: str, email: str) -> bool:
        found = self.db.execute(
            select(UserModel.id).where(
                or_(UserModel.username == username, UserModel.email == email)
            )
        ).first()
        return found is not None

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user

    def update_user(self, user: UserModel, fields: dict) -> UserModel:
        for name, value in fields.items():
            setattr(user, name, value)
        self.db.flush()
        return user
