from pydantic import BaseModel, ConfigDict, Field


class InstructionIn(BaseModel):
    description: str = Field("", max_length=5000)


class Instruction(BaseModel):
    step_number: int
    description: str

    model_config = ConfigDict(from_attributes=True)
