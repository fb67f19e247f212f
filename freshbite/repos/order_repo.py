# freshbite/repos/order_repo.py
from sqlalchemy import select, update

from freshbite.data.models.order import OrderModel
from freshbite.data.models.order_item import OrderItemModel
from freshbite.repos.base_repo import BaseRepo


class OrderRepo(BaseRepo):
    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def get_order(self, order_id: int, user_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.id == order_id,
                OrderModel.user_id == user_id,
            )
        ).unique().scalar_one_or_none()

    def list_orders(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).unique().scalars().all()
        )

    def update_order_status(self, order_id: int, user_id: int, status: str) -> int:
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.user_id == user_id)
            .values(status=status)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
