"""Reference data written once into empty collections at process start."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from coachsync.schemas.workout import (
    Client,
    Exercise,
    SetPrescription,
    TemplateExercise,
    WorkoutTemplate,
)
from coachsync.store import LocalEntityStore

log = logging.getLogger(__name__)

DEFAULT_EXERCISES = [
    Exercise(id="1", name="Push-ups", category="Bodyweight",
             muscle_groups=["Chest", "Shoulders", "Triceps"],
             instructions="Start in plank position, lower body to ground, push back up",
             equipment="None"),
    Exercise(id="2", name="Squats", category="Bodyweight",
             muscle_groups=["Quadriceps", "Glutes", "Hamstrings"],
             instructions="Stand with feet shoulder-width apart, lower hips back and down",
             equipment="None"),
    Exercise(id="3", name="Bench Press", category="Strength",
             muscle_groups=["Chest", "Shoulders", "Triceps"],
             instructions="Lie on bench, lower bar to chest, press up",
             equipment="Barbell, Bench"),
    Exercise(id="4", name="Deadlift", category="Strength",
             muscle_groups=["Hamstrings", "Glutes", "Back"],
             instructions="Stand with feet hip-width apart, lift bar from ground",
             equipment="Barbell"),
    Exercise(id="5", name="Pull-ups", category="Bodyweight",
             muscle_groups=["Back", "Biceps"],
             instructions="Hang from bar, pull body up until chin over bar",
             equipment="Pull-up bar"),
    Exercise(id="6", name="Overhead Press", category="Strength",
             muscle_groups=["Shoulders", "Triceps", "Core"],
             instructions="Press weight overhead from shoulder level",
             equipment="Barbell or Dumbbells"),
    Exercise(id="7", name="Barbell Rows", category="Strength",
             muscle_groups=["Back", "Biceps"],
             instructions="Pull barbell to lower chest while bent over",
             equipment="Barbell"),
    Exercise(id="8", name="Lunges", category="Bodyweight",
             muscle_groups=["Quadriceps", "Glutes", "Hamstrings"],
             instructions="Step forward and lower back knee toward ground",
             equipment="None"),
]

DEFAULT_CLIENTS = [
    Client(id="client-1", name="Sarah Johnson", email="sarah@example.com",
           avatar="👩‍💼", join_date=date(2024, 1, 15), trainer_id="trainer-1"),
    Client(id="client-2", name="Mike Chen", email="mike@example.com",
           avatar="👨‍💻", join_date=date(2024, 2, 1), trainer_id="trainer-1"),
    Client(id="client-3", name="Emma Wilson", email="emma@example.com",
           avatar="👩‍🎨", join_date=date(2024, 1, 20), trainer_id="trainer-1"),
]


def _template_exercise(slot: int, exercise_id: str, sets: list[tuple[int, float, int]]) -> TemplateExercise:
    ref = next(e for e in DEFAULT_EXERCISES if e.id == exercise_id)
    return TemplateExercise(
        id=f"ex-{slot + 1}",
        exercise_id=exercise_id,
        exercise=Exercise(id=ref.id, name=ref.name, category=ref.category, muscle_groups=ref.muscle_groups),
        sets=[SetPrescription(reps=r, weight=w, rest_time=rest) for r, w, rest in sets],
        order=slot,
    )


def default_templates() -> list[WorkoutTemplate]:
    now = datetime.now(timezone.utc)
    return [
        WorkoutTemplate(
            id="template-1",
            name="Full Body Strength",
            description="A comprehensive full-body strength training workout",
            category="Strength",
            duration=45,
            exercises=[
                _template_exercise(0, "3", [(8, 60, 90), (8, 65, 90), (6, 70, 120)]),
                _template_exercise(1, "4", [(5, 80, 120), (5, 85, 120), (3, 90, 180)]),
                _template_exercise(2, "2", [(12, 0, 60), (12, 0, 60), (15, 0, 60)]),
            ],
            created_by="trainer-1",
            created_at=now,
            updated_at=now,
            is_public=False,
        )
    ]


async def initialize_default_data(store: LocalEntityStore) -> None:
    """Seed exercises, sample clients and a sample template into empty collections.

    Safe to call on every start: a collection that already holds data is left alone.
    Seeded entities are reference data and are not added to the pending-sync ledger.
    """
    if not await store.get_exercises():
        await store.exercises.replace_all(DEFAULT_EXERCISES)
        log.info("Seeded %d default exercises", len(DEFAULT_EXERCISES))

    if not await store.get_clients():
        await store.clients.replace_all(DEFAULT_CLIENTS)
        log.info("Seeded %d sample clients", len(DEFAULT_CLIENTS))

    if not await store.get_templates():
        templates = default_templates()
        await store.templates.replace_all(templates)
        log.info("Seeded %d sample templates", len(templates))
