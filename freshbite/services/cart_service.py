from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freshbite.data.models.cart_item import CartItemModel
from freshbite.domain.exceptions import ValidationError, NotFound
from freshbite.domain.schemas import CurrentUser
from freshbite.repos.cart_repo import CartRepo
from freshbite.repos.recipe_repo import RecipeRepo
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Prosta implementacja cqrs dla koszyka
    commands (add, update, remove, clear) modyfikuja stan
    query (get) tylko odczyt, ceny biezace z katalogu
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.recipes = RecipeRepo(db)

    #query - odczyt
    def get_cart(self, user: CurrentUser) -> Dict[str, Any]:
        items = self.repo.get_cart_items(user.id)
        subtotal = sum((i.recipe.price * i.quantity for i in items), Decimal("0.00"))

        #dict przeksztalcany w jsona
        return {
            "items": [
                {
                    "id": i.id,
                    "user_id": i.user_id,
                    "recipe_id": i.recipe_id,
                    "quantity": i.quantity,
                    "created_at": i.created_at,
                    "name": i.recipe.name,
                    "description": i.recipe.description,
                    "price": i.recipe.price,
                    "image_url": i.recipe.image_url,
                    "category": i.recipe.category,
                    "offer": i.recipe.offer,
                    "rating": i.recipe.rating,
                }
                for i in items
            ],
            "subtotal": subtotal,
        }

    #commands
    def add_product(self, user: CurrentUser, recipe_id: int | None, quantity: int | None = None) -> int:
        """Dodaje przepis do koszyka, istniejaca linia dostaje += quantity. Zwraca nowa ilosc."""
        if not recipe_id:
            raise ValidationError("Recipe ID is required")

        qty = quantity or 1
        if qty < 1:
            raise ValidationError("Quantity must be at least 1")

        if not self.recipes.get_recipe(recipe_id):
            raise NotFound("Recipe not found")

        try:
            line = self._merge_line(user.id, recipe_id, qty)
            self.repo.commit()
        except IntegrityError:
            # rownolegly insert tej samej pary (user, recipe), druga proba trafia w UPDATE
            self.repo.rollback()
            logger.info(f"Cart line for user {user.id} recipe {recipe_id} created concurrently, retrying as increment")
            try:
                line = self._merge_line(user.id, recipe_id, qty)
                self.repo.commit()
            except Exception:
                self.repo.rollback()
                raise
        except Exception:
            self.repo.rollback()
            raise

        return line.quantity

    def _merge_line(self, user_id: int, recipe_id: int, qty: int) -> CartItemModel:
        existing = self.repo.get_cart_item(user_id, recipe_id)

        if existing:
            logger.info(
                f"Recipe {recipe_id} already in cart of user {user_id}, "
                f"quantity {existing.quantity} -> {existing.quantity + qty}"
            )
            self.repo.increment_quantity(user_id, recipe_id, qty)
            return existing

        logger.info(f"Adding recipe {recipe_id} x{qty} to cart of user {user_id}")
        return self.repo.add_cart_item(
            CartItemModel(user_id=user_id, recipe_id=recipe_id, quantity=qty)
        )

    def update_quantity(self, user: CurrentUser, item_id: int, quantity: int):
        """quantity <= 0 usuwa linie; powtorzenie na usunietej linii nic nie robi."""
        try:
            if quantity <= 0:
                removed = self.repo.delete_cart_item(user.id, item_id)
                logger.info(f"Cart item {item_id} of user {user.id} removed by quantity {quantity} ({removed} rows)")
            else:
                changed = self.repo.set_quantity(user.id, item_id, quantity)
                if changed == 0:
                    raise NotFound("Cart item not found")
                logger.info(f"Cart item {item_id} of user {user.id} set to {quantity}")
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

    def remove_product(self, user: CurrentUser, item_id: int):
        try:
            removed = self.repo.delete_cart_item(user.id, item_id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Cart item {item_id} removed for user {user.id} ({removed} rows)")

    def clear_cart(self, user: CurrentUser):
        try:
            removed = self.repo.clear(user.id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Cart of user {user.id} cleared ({removed} rows)")
