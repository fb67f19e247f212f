#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from freshbite.data.models.user import UserModel
from freshbite.data.models.address import AddressModel
from freshbite.data.models.recipe import RecipeModel
from freshbite.data.models.cart_item import CartItemModel
from freshbite.data.models.order import OrderModel
from freshbite.data.models.order_item import OrderItemModel

__all__ = [
    "UserModel",
    "AddressModel",
    "RecipeModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
]
