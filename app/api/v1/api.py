from fastapi import APIRouter

from app.api.v1.endpoints import categories, comments, profiles, recipes

api_router = APIRouter()
api_router.include_router(recipes.router, prefix="/recipes", tags=["Recipes"])
api_router.include_router(comments.router, prefix="/comments", tags=["Comments"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
