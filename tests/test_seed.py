from freshbite.data.models.recipe import RecipeModel
from freshbite.data.seed import RECIPES, seed
from tests.utils.helpers import make_recipe


def test_seed_fills_empty_catalog(db):
    assert seed(db) == len(RECIPES)
    assert db.query(RecipeModel).count() == len(RECIPES)


def test_seed_is_noop_when_catalog_has_recipes(db):
    make_recipe(db)

    assert seed(db) == 0
    assert db.query(RecipeModel).count() == 1
