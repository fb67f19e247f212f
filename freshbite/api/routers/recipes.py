# freshbite/api/routers/recipes.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from freshbite.data.database import get_db
from freshbite.domain.exceptions import NotFound
from freshbite.domain.schemas import RecipeOut
from freshbite.services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("", response_model=List[RecipeOut])
def list_recipes(
    category: str | None = Query(None),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return RecipeService(db).list_recipes(category=category, search=search)


@router.get("/{recipe_id}", response_model=RecipeOut)
def get_recipe(recipe_id: int, db: Session = Depends(get_db)):
    try:
        return RecipeService(db).get_recipe(recipe_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
