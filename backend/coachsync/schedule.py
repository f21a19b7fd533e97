"""Which template a client trains on a given day, from their active plan."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from coachsync.schemas.workout import ScheduledDay, Weekday, WorkoutPlan, WorkoutTemplate
from coachsync.store import LocalEntityStore

def find_active_plan(plans: Iterable[WorkoutPlan], on: date) -> Optional[WorkoutPlan]:
    return next((p for p in plans if p.covers(on)), None)

def week_of(day: date) -> list[date]:
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=i) for i in range(7)]

async def todays_workout(store: LocalEntityStore, client_id: str, on: date) -> Optional[WorkoutTemplate]:
    plan = find_active_plan(await store.get_client_plans(client_id), on)
    if plan is None:
        return None
    template_id = plan.template_for(on)
    if not template_id:
        return None  # rest day
    return await store.get_template(template_id)

async def weekly_schedule(store: LocalEntityStore, client_id: str, today: date) -> list[ScheduledDay]:
    plan = find_active_plan(await store.get_client_plans(client_id), today)
    if plan is None:
        return []

    templates = {t.id: t for t in await store.get_templates()}
    done = {s.date for s in await store.get_client_sessions(client_id) if s.completed}

    days = []
    for day in week_of(today):
        template_id = plan.template_for(day)
        completed = day in done
        days.append(ScheduledDay(
            date=day,
            weekday=Weekday.of(day),
            template=templates.get(template_id) if template_id else None,
            completed=completed,
            missed=day < today and bool(template_id) and not completed,
        ))
    return days
