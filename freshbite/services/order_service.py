# freshbite/services/order_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from freshbite.data.models.order import OrderModel
from freshbite.data.models.order_item import OrderItemModel
from freshbite.domain.exceptions import EmptyCart, NoAddress, NotFound, InvalidStatus
from freshbite.domain.schemas import CurrentUser, OrderCreateIn
from freshbite.repos.address_repo import AddressRepo
from freshbite.repos.cart_repo import CartRepo
from freshbite.repos.order_repo import OrderRepo
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)

ORDER_STATUSES = ("pending", "packed", "on_the_way", "arriving", "delivered")


def serialize_order(order: OrderModel) -> Dict[str, Any]:
    """
    Zamowienie + pozycje + dane adresu w jednym dict
    pozycje w kolejnosci wstawienia, pusta lista gdy brak
    """
    address = order.address

    return {
        "id": order.id,
        "user_id": order.user_id,
        "total_amount": order.total_amount,
        "delivery_address": order.delivery_address,
        "payment_id": order.payment_id,
        "payment_status": order.payment_status,
        "status": order.status,
        "address_id": order.address_id,
        "created_at": order.created_at,
        "address_label": address.label if address else None,
        "address_formatted": address.formatted_address if address else None,
        "address_latitude": address.latitude if address else None,
        "address_longitude": address.longitude if address else None,
        "address_city": address.city if address else None,
        "address_state": address.state if address else None,
        "address_postal_code": address.postal_code if address else None,
        "address_country": address.country if address else None,
        "items": [
            {
                "id": item.id,
                "recipe_id": item.recipe_id,
                "quantity": item.quantity,
                "price": item.price,
                "name": item.recipe.name if item.recipe else "",
                "image_url": (item.recipe.image_url or "") if item.recipe else "",
            }
            for item in (order.items or [])
        ],
    }


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Zamowienie powstaje z aktualnej zawartosci koszyka usera.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.addresses = AddressRepo(db)

    def create_order_from_cart(self, user: CurrentUser, payload: OrderCreateIn) -> Dict[str, Any]:
        """
        Use Case: Tworzenie zamowienia z koszyka.

        1. Snapshot linii koszyka (recipe, ilosc, cena z katalogu)
        2. Wybor adresu: jawne address_id (wlasnosc sprawdzana) albo primary
        3. Zapis orders + order_items z cenami ze snapshotu
        4. Usuniecie z koszyka linii ze snapshotu
        Kroki 1-4 w jednej transakcji, blad = rollback calosci.
        """
        try:
            snapshot = [
                (line.id, line.recipe_id, line.quantity, line.recipe.price)
                for line in self.carts.get_cart_items(user.id)
            ]
            if not snapshot:
                raise EmptyCart("Cart is empty")

            if payload.address_id:
                address = self.addresses.get_owned(payload.address_id, user.id)
                if not address:
                    raise NotFound("Address not found")
            else:
                address = self.addresses.get_primary(user.id)
                if not address:
                    raise NoAddress("Please add a delivery address before placing an order")

            delivery_snapshot = payload.delivery_address or address.formatted_address or address.address_line

            subtotal = sum((price * qty for _, _, qty, price in snapshot), Decimal("0.00"))
            total = payload.total_amount if payload.total_amount is not None else subtotal

            order = self.repo.create_order(
                OrderModel(
                    user_id=user.id,
                    total_amount=total,
                    delivery_address=delivery_snapshot,
                    payment_id=payload.payment_id,
                    payment_status=payload.payment_status or "pending",
                    status="pending",
                    address_id=address.id,
                )
            )

            for _, recipe_id, quantity, price in snapshot:
                self.repo.add_order_item(
                    OrderItemModel(
                        order_id=order.id,
                        recipe_id=recipe_id,
                        quantity=quantity,
                        price=price,
                    )
                )

            # usuwane tylko linie ze snapshotu
            self.carts.delete_lines(user.id, [line_id for line_id, _, _, _ in snapshot])
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(
            f"Order {order.id} created for user {user.id} with {len(snapshot)} items, "
            f"total {total}, address {address.id}"
        )

        # swiezy odczyt z pozycjami i adresem
        self.db.expire(order)
        return self.get_order(user, order.id)

    def list_orders(self, user: CurrentUser) -> list[Dict[str, Any]]:
        return [serialize_order(o) for o in self.repo.list_orders(user.id)]

    def get_order(self, user: CurrentUser, order_id: int) -> Dict[str, Any]:
        """
        Use Case: Pobranie zamowienia (Query).
        """
        order = self.repo.get_order(order_id, user.id)

        if not order:
            raise NotFound("Order not found")

        return serialize_order(order)

    def update_status(self, user: CurrentUser, order_id: int, status: str):
        """Dowolny z pieciu statusow, kolejnosc pilnuje wolajacy."""
        if status not in ORDER_STATUSES:
            raise InvalidStatus("Invalid status")

        try:
            changed = self.repo.update_order_status(order_id, user.id, status)
            if changed == 0:
                raise NotFound("Order not found")
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order_id} of user {user.id} moved to {status}")
