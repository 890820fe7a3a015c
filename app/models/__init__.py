from .base import Base
from .profile import Profile
from .recipe import Recipe
from .ingredient import Ingredient
from .instruction import Instruction
from .category import Category
from .recipe_category_association import recipe_category_association
from .recipe_image import RecipeImage
from .engagement import Like, SavedRecipe
from .comment import Comment

__all__ = [
    "Base",
    "Profile",
    "Recipe",
    "Ingredient",
    "Instruction",
    "Category",
    "recipe_category_association",
    "RecipeImage",
    "Like",
    "SavedRecipe",
    "Comment",
]
