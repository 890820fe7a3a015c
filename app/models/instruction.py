from .base import Base

from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint


class Instruction(Base):
    __tablename__ = "instructions"
    __table_args__ = (
        UniqueConstraint("recipe_id", "step_number", name="uq_instructions_recipe_step"),
    )

    id = Column(Integer, primary_key=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), index=True, nullable=False
    )
    step_number = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)
