from sqlalchemy import select, func, or_

from freshbite.data.models.recipe import RecipeModel
from freshbite.repos.base_repo import BaseRepo


class RecipeRepo(BaseRepo):
    def get_recipe(self, recipe_id: int) -> RecipeModel | None:
        return self.db.get(RecipeModel, recipe_id)

    def list_recipes(self, category: str | None = None, search: str | None = None) -> list[RecipeModel]:
        stmt = select(RecipeModel)

        if category:
            stmt = stmt.where(RecipeModel.category == category)

        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(RecipeModel.name).like(pattern),
                    func.lower(RecipeModel.description).like(pattern),
                )
            )

        stmt = stmt.order_by(RecipeModel.created_at.desc(), RecipeModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def count(self) -> int:
        return self.db.execute(select(func.count(RecipeModel.id))).scalar_one()

    def add_recipe(self, recipe: RecipeModel) -> RecipeModel:
        self.db.add(recipe)
        self.db.flush()
        return recipe
