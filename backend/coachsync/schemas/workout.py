from datetime import date, datetime
from enum import Enum
from typing import Annotated

from pydantic import Field, field_validator, model_validator

from coachsync.schemas.base import CamelModel

IdStr = Annotated[str, Field(min_length=1, max_length=120)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0)]


class Weekday(str, Enum):
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"
    friday = "Friday"
    saturday = "Saturday"
    sunday = "Sunday"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]


class Exercise(CamelModel):
    id: IdStr
    name: str
    category: str
    muscle_groups: list[str] = []
    instructions: str | None = None
    equipment: str | None = None


class SetPrescription(CamelModel):
    reps: NonNegInt
    weight: NonNegFloat = 0
    rest_time: NonNegInt = 0   # seconds


class TemplateExercise(CamelModel):
    id: IdStr
    exercise_id: IdStr
    exercise: Exercise | None = None
    sets: list[SetPrescription] = []
    order: NonNegInt = 0


class WorkoutTemplate(CamelModel):
    id: IdStr
    name: str
    description: str | None = None
    category: str
    duration: NonNegInt   # minutes
    exercises: list[TemplateExercise] = []
    created_by: IdStr
    created_at: datetime
    updated_at: datetime
    is_public: bool = False

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2


class WorkoutPlan(CamelModel):
    id: IdStr
    client_id: IdStr
    trainer_id: IdStr
    name: str
    start_date: date
    end_date: date
    # Sparse: a missing (or null) day is a rest day
    schedule: dict[Weekday, IdStr | None] = {}
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def dates_in_order(self) -> "WorkoutPlan":
        if self.start_date > self.end_date:
            raise ValueError("startDate must not be after endDate")
        return self

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def template_for(self, day: date) -> str | None:
        return self.schedule.get(Weekday.of(day))


class LoggedSet(CamelModel):
    reps: NonNegInt
    weight: NonNegFloat = 0
    completed: bool = False
    rest_time: NonNegInt | None = None


class SessionExercise(CamelModel):
    id: IdStr
    exercise_id: IdStr
    sets: list[LoggedSet] = []
    notes: str | None = None


class WorkoutSession(CamelModel):
    id: IdStr
    client_id: IdStr
    template_id: IdStr
    plan_id: str | None = None
    date: date
    start_time: datetime | None = None
    end_time: datetime | None = None
    exercises: list[SessionExercise] = []
    notes: str | None = None
    completed: bool = False


class Client(CamelModel):
    id: IdStr
    name: str
    email: str
    avatar: str = ""
    join_date: date
    trainer_id: IdStr


class ScheduledDay(CamelModel):
    date: date
    weekday: Weekday
    template: WorkoutTemplate | None = None
    completed: bool = False
    missed: bool = False
