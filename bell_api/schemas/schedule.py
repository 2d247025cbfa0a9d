from pydantic import BaseModel, ConfigDict, Field

class ScheduleEventOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    code: str
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")


class ScheduleOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    friendly_name: str = Field(..., alias="friendlyName")
    schedule: list[ScheduleEventOut] = []


class UploadOut(BaseModel):
    success: bool = True
    warnings: list[dict[str, str]] | None = None
