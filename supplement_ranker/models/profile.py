"""
User profile model for a single recommendation request.

An empty ``goals`` tuple means "neutral" (no stated preference), not "wants
nothing": the effectiveness evaluator returns a neutral score for it.

``DetailedProfile`` adds the optional detailed-assessment answers used by
``recommendations.detailed`` to boost overall scores.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from supplement_ranker.taxonomy.contraindication_taxonomy import ContraindicationTag
from supplement_ranker.taxonomy.goal_taxonomy import HealthGoal, Priority
from supplement_ranker.taxonomy.lifestyle_taxonomy import (
    AgeGroup,
    AlcoholConsumption,
    ExerciseFrequency,
    MainConcern,
    SleepQuality,
    StressLevel,
)


class UserProfile(BaseModel):
    """Goals, health conditions, budget and priority of one user.

    Attributes:
        goals: Desired outcomes; duplicates are dropped, order preserved.
        conditions: Health conditions / medications; duplicates dropped.
        budget_per_day: Daily budget in the catalog currency, ``None`` when
            the user did not state one.
        priority: Which dimension the ranking should emphasise.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    goals: tuple[HealthGoal, ...] = ()
    conditions: tuple[ContraindicationTag, ...] = ()
    budget_per_day: Optional[float] = None
    priority: Priority = Priority.BALANCED

    @field_validator("goals", "conditions", mode="before")
    @classmethod
    def none_to_empty(cls, v: object) -> object:
        return () if v is None else v

    @field_validator("goals", "conditions")
    @classmethod
    def drop_duplicates(cls, v: tuple) -> tuple:
        return tuple(dict.fromkeys(v))

    @field_validator("budget_per_day")
    @classmethod
    def validate_budget(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError(f"budget_per_day must be positive when given, got {v}.")
        return v


class DetailedProfile(UserProfile):
    """``UserProfile`` plus the optional answers of the detailed assessment.

    Every extra field is optional; a ``DetailedProfile`` with none of them
    set ranks exactly like the plain ``UserProfile`` it extends.

    Attributes:
        secondary_goals: Further goals; each one adds a flat boost.
        age_group: Selects a row of the age boost table.
        exercise_frequency: Selects a row of the exercise boost table.
        stress_level: Selects a row of the stress boost table.
        sleep_quality: Selects a row of the sleep boost table.
        alcohol_consumption: Selects a row of the alcohol boost table.
        main_concern: Selects a row of the main-concern boost table.
    """

    secondary_goals: tuple[HealthGoal, ...] = ()
    age_group: Optional[AgeGroup] = None
    exercise_frequency: Optional[ExerciseFrequency] = None
    stress_level: Optional[StressLevel] = None
    sleep_quality: Optional[SleepQuality] = None
    alcohol_consumption: Optional[AlcoholConsumption] = None
    main_concern: Optional[MainConcern] = None

    @field_validator("secondary_goals", mode="before")
    @classmethod
    def secondary_none_to_empty(cls, v: object) -> object:
        return () if v is None else v

    @field_validator("secondary_goals")
    @classmethod
    def drop_duplicate_secondary_goals(cls, v: tuple) -> tuple:
        return tuple(dict.fromkeys(v))


DETAILED_PROFILE_FIELDS: frozenset[str] = frozenset(
    set(DetailedProfile.model_fields) - set(UserProfile.model_fields)
)
