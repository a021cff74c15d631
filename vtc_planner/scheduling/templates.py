"""Built-in weekly planning templates (work window and breaks per day type)."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from vtc_planner.schemas.planning_schema import BreakTime, Interval
from vtc_planner.utils import is_weekend


class TemplateDay(BaseModel):
    """Work window and breaks applied to one kind of day."""

    work_window: Interval
    breaks: list[BreakTime] = Field(default_factory=list)


class PlanningTemplate(BaseModel):
    """A named pair of weekday and weekend day templates."""

    id: str
    name: str
    description: str
    weekdays: TemplateDay
    weekends: TemplateDay

    def for_date(self, day: date) -> TemplateDay:
        return self.weekends if is_weekend(day) else self.weekdays


TEMPLATES: dict[str, PlanningTemplate] = {
    t.id: t
    for t in [
        PlanningTemplate(
            id="standard_week",
            name="Standard week",
            description="Regular working week with a lunch break.",
            weekdays=TemplateDay(
                work_window=Interval.parse("07:00", "19:00"),
                breaks=[BreakTime(start="12:00", end="13:00", reason="Lunch break")],
            ),
            weekends=TemplateDay(work_window=Interval.parse("09:00", "22:00")),
        ),
        PlanningTemplate(
            id="evenings_weekends",
            name="Evenings and weekends",
            description="Maximise evening revenue, long weekend shifts.",
            weekdays=TemplateDay(work_window=Interval.parse("16:00", "23:00")),
            weekends=TemplateDay(
                work_window=Interval.parse("08:00", "23:59"),
                breaks=[BreakTime(start="14:00", end="15:00", reason="Break")],
            ),
        ),
        PlanningTemplate(
            id="airports",
            name="Airports",
            description="Early starts and late finishes for airport runs.",
            weekdays=TemplateDay(
                work_window=Interval.parse("05:00", "23:00"),
                breaks=[
                    BreakTime(start="10:00", end="11:00", reason="Rest"),
                    BreakTime(start="15:00", end="16:00", reason="Rest"),
                ],
            ),
            weekends=TemplateDay(
                work_window=Interval.parse("05:00", "23:00"),
                breaks=[BreakTime(start="12:00", end="13:00", reason="Lunch break")],
            ),
        ),
    ]
}


def get_template(template_id: str) -> Optional[PlanningTemplate]:
    """Look up a template by id (case-insensitive). Returns None if unknown."""
    return TEMPLATES.get(template_id.strip().lower())


def list_templates() -> list[PlanningTemplate]:
    return list(TEMPLATES.values())
