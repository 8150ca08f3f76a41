from pydantic import BaseModel, Field


class VehicleTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    needed_size: int = Field(1, ge=1)


class VehicleTypeOut(BaseModel):
    id: int
    name: str
    needed_size: int

    class Config:
        from_attributes = True
