# registra os models no Base.metadata
from bell_api.models.day import Day
from bell_api.models.schedule import Schedule

__all__ = ["Day", "Schedule"]
