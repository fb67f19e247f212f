# freshbite/data/seed.py
from decimal import Decimal

from freshbite.data.database import SessionLocal
from freshbite.data.models.recipe import RecipeModel
from freshbite.repos.recipe_repo import RecipeRepo
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)

RECIPES = [
    {
        "name": "Paneer Butter Masala",
        "description": "Cottage cheese cubes simmered in a creamy tomato gravy",
        "price": Decimal("249.00"),
        "image_url": "/images/paneer-butter-masala.jpg",
        "category": "main-course",
        "offer": "10% off",
        "rating": 4.6,
    },
    {
        "name": "Masala Dosa",
        "description": "Crisp rice crepe stuffed with spiced potato",
        "price": Decimal("129.00"),
        "image_url": "/images/masala-dosa.jpg",
        "category": "breakfast",
        "offer": None,
        "rating": 4.8,
    },
    {
        "name": "Veg Biryani",
        "description": "Basmati rice layered with vegetables and whole spices",
        "price": Decimal("199.00"),
        "image_url": "/images/veg-biryani.jpg",
        "category": "main-course",
        "offer": "Free raita",
        "rating": 4.4,
    },
    {
        "name": "Gulab Jamun",
        "description": "Milk dumplings soaked in rose-cardamom syrup",
        "price": Decimal("89.00"),
        "image_url": "/images/gulab-jamun.jpg",
        "category": "dessert",
        "offer": None,
        "rating": 4.7,
    },
]


def seed(db=None) -> int:
    """Wypelnia pusty katalog, zwraca liczbe dodanych przepisow."""
    own_session = db is None
    db = db or SessionLocal()
    repo = RecipeRepo(db)
    try:
        # not forcing: only seed if empty
        if repo.count():
            return 0
        for data in RECIPES:
            repo.add_recipe(RecipeModel(**data))
        repo.commit()
        logger.info(f"Seeded {len(RECIPES)} recipes")
        return len(RECIPES)
    except Exception:
        repo.rollback()
        raise
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    seed()
