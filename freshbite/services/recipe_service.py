# freshbite/services/recipe_service.py
from sqlalchemy.orm import Session

from freshbite.data.models.recipe import RecipeModel
from freshbite.domain.exceptions import NotFound
from freshbite.repos.recipe_repo import RecipeRepo


class RecipeService:
    """Katalog tylko do odczytu."""

    def __init__(self, db: Session):
        self.repo = RecipeRepo(db)

    def list_recipes(self, category: str | None = None, search: str | None = None) -> list[RecipeModel]:
        if category == "all":
            category = None
        return self.repo.list_recipes(category=category, search=search)

    def get_recipe(self, recipe_id: int) -> RecipeModel:
        recipe = self.repo.get_recipe(recipe_id)
        if not recipe:
            raise NotFound("Recipe not found")
        return recipe
