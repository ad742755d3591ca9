"""
FitPlanner - ORM Models
SQLAlchemy mapped tables backing profiles, history, ratings and tracking.
"""

from sqlalchemy import (
    String, Integer, ForeignKey, Text, DateTime, JSON, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from database import Base
import datetime


class UserProfileRecord(Base):
    __tablename__ = "user_profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    gender: Mapped[str] = mapped_column(String(32), default="")
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[str] = mapped_column(String(32), default="")
    preferred_equipment: Mapped[list] = mapped_column(JSON, default=list)
    preferred_muscle_groups: Mapped[list] = mapped_column(JSON, default=list)
    last_updated: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Relationships
    completed_workouts: Mapped[list["CompletedWorkoutRecord"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", order_by="CompletedWorkoutRecord.date"
    )
    ratings: Mapped[list["WorkoutRatingRecord"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", order_by="WorkoutRatingRecord.id"
    )
    completed_exercises: Mapped[list["CompletedExerciseRecord"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    favorites: Mapped[list["FavoriteExerciseRecord"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    saved_workouts: Mapped[list["SavedWorkoutRecord"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )


class CompletedWorkoutRecord(Base):
    __tablename__ = "completed_workouts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("user_profiles.id"), nullable=False, index=True)
    date: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    workout_plan_id: Mapped[str] = mapped_column(String(64), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    muscle_groups: Mapped[list] = mapped_column(JSON, default=list)
    difficulty: Mapped[str] = mapped_column(String(16), nullable=False)

    user: Mapped["UserProfileRecord"] = relationship(back_populates="completed_workouts")


class WorkoutRatingRecord(Base):
    __tablename__ = "workout_ratings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("user_profiles.id"), nullable=False, index=True)
    workout_plan_id: Mapped[str] = mapped_column(String(64), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    timestamp: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "workout_plan_id", name="uq_user_plan_rating"),
    )

    user: Mapped["UserProfileRecord"] = relationship(back_populates="ratings")


class CompletedExerciseRecord(Base):
    __tablename__ = "completed_exercises"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("user_profiles.id"), nullable=False, index=True)
    exercise_id: Mapped[str] = mapped_column(String(128), nullable=False)
    workout_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    completed_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    calories_burned: Mapped[int] = mapped_column(Integer, default=0)

    __table_args__ = (
        UniqueConstraint("user_id", "exercise_id", name="uq_user_exercise_completion"),
    )

    user: Mapped["UserProfileRecord"] = relationship(back_populates="completed_exercises")


class FavoriteExerciseRecord(Base):
    __tablename__ = "favorite_exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("user_profiles.id"), nullable=False, index=True)
    exercise_id: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    muscle_group: Mapped[str | None] = mapped_column(String(32), nullable=True)
    added_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "exercise_id", name="uq_user_favorite"),
    )

    user: Mapped["UserProfileRecord"] = relationship(back_populates="favorites")


class SavedWorkoutRecord(Base):
    __tablename__ = "saved_workouts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("user_profiles.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    date: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Serialized WorkoutPlan
    plan: Mapped[dict] = mapped_column(JSON, nullable=False)

    user: Mapped["UserProfileRecord"] = relationship(back_populates="saved_workouts")
