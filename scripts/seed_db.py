import asyncio
import json
import sys
import os
from pathlib import Path
from sqlalchemy import delete
from sqlalchemy.future import select

sys.path.append(os.getcwd())

from app.db.session import AsyncSessionLocal
from app.services import profile_service, recipe_service
from app.schemas import ProfileCreate, RecipeCreate
from app.models import Category, Profile

BASE_DIR = Path(__file__).parents[1]
RECIPES_PATH = BASE_DIR / "datasets" / "recipe_samples.json"

DEMO_USER_ID = "demo-user"
DEMO_USERNAME = "demo_cook"


async def seed():
    print("Seeding database...")

    async with AsyncSessionLocal() as db:
        print(" - Cleaning old demo data...")
        await db.execute(delete(Profile).where(Profile.id == DEMO_USER_ID))
        await db.commit()

        await profile_service.create_profile(
            db=db,
            user_id=DEMO_USER_ID,
            profile_in=ProfileCreate(username=DEMO_USERNAME, full_name="Demo Cook"),
        )

        result = await db.execute(select(Category))
        category_ids = {c.slug: c.id for c in result.scalars().all()}

        print(" - Loading recipes...")
        with open(RECIPES_PATH) as f:
            recipes_data = json.load(f)

        for r_data in recipes_data:
            r_input = r_data.copy()
            slugs = r_input.pop("categories", [])
            r_input["category_ids"] = [category_ids[s] for s in slugs if s in category_ids]

            recipe_in = RecipeCreate(**r_input)
            await recipe_service.create_recipe(db=db, owner_id=DEMO_USER_ID, recipe_in=recipe_in)

        print(f"Successfully inserted {len(recipes_data)} recipes.")

if __name__ == "__main__":
    asyncio.run(seed())
