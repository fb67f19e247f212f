# freshbite/repos/cart_repo.py
from sqlalchemy import select, update, delete

from freshbite.data.models.cart_item import CartItemModel
from freshbite.repos.base_repo import BaseRepo


class CartRepo(BaseRepo):
    def get_cart_items(self, user_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.created_at.desc(), CartItemModel.id.desc())
            ).scalars().all()
        )

    def get_cart_item(self, user_id: int, recipe_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.recipe_id == recipe_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def increment_quantity(self, user_id: int, recipe_id: int, delta: int) -> int:
        # quantity = quantity + delta liczone w bazie, bez read-modify-write
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.user_id == user_id,
                CartItemModel.recipe_id == recipe_id,
            )
            .values(quantity=CartItemModel.quantity + delta)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def set_quantity(self, user_id: int, item_id: int, quantity: int) -> int:
        result = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
            .values(quantity=quantity)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def delete_cart_item(self, user_id: int, item_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def clear(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def delete_lines(self, user_id: int, item_ids: list[int]) -> int:
        # tylko wskazane linie, dodane w miedzyczasie zostaja w koszyku
        if not item_ids:
            return 0
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.user_id == user_id, CartItemModel.id.in_(item_ids))
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
