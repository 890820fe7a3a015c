from .recipe_base import RecipeBase
from .recipe_create import RecipeCreate
from .recipe_update import RecipeUpdate
from .recipe import Recipe, RecipeSummary
from .ingredient import Ingredient, IngredientIn
from .instruction import Instruction, InstructionIn
from .category import Category
from .recipe_image import RecipeImage
from .profile import Author, Profile, ProfileCreate, ProfileUpdate
from .comment import Comment, CommentIn
from .engagement import EngagementState, LikeToggle, SaveToggle
from .search import SearchFilters, SearchResult

__all__ = [
    "RecipeBase",
    "RecipeCreate",
    "RecipeUpdate",
    "Recipe",
    "RecipeSummary",
    "Ingredient",
    "IngredientIn",
    "Instruction",
    "InstructionIn",
    "Category",
    "RecipeImage",
    "Author",
    "Profile",
    "ProfileCreate",
    "ProfileUpdate",
    "Comment",
    "CommentIn",
    "EngagementState",
    "LikeToggle",
    "SaveToggle",
    "SearchFilters",
    "SearchResult",
]
