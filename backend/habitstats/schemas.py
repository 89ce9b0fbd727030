from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


HabitType = Literal["daily", "weekly"]


class HabitMetadata(BaseModel):
    id: str
    name: Optional[str] = None
    createdAt: Union[datetime, date, str]
    type: HabitType = "daily"


class DailyObservation(BaseModel):
    date: date
    count: int = Field(..., ge=0)


class ChartPoint(BaseModel):
    date: str
    label: str
    value: int = Field(..., ge=0)


class HabitStats(BaseModel):
    currentStreak: int = Field(..., ge=0)
    longestStreak: int = Field(..., ge=0)
    completionPercentage: int = Field(..., ge=0)
    totalCompletions: int = Field(..., ge=0)
    lastCompletedDate: Optional[str] = None


class CompletionChart(BaseModel):
    period: str
    days: int = Field(..., ge=1)
    startDate: str
    endDate: str
    points: List[ChartPoint]
    total: int = Field(..., ge=0)
