from pydantic import BaseModel

class DayOut(BaseModel):
    date: str
    schedule: str

    class Config:
        from_attributes = True
