"""
ORM table definitions

Timestamps and calendar dates are stored as ISO-8601 text, the same format
the dashboard sends and expects back.
"""
from typing import Any, Dict, Optional

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class Base(DeclarativeBase):
    """Base class for all fitness tables"""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize a row to the camelCase shape used by the API"""
        return {
            to_camel(attr.key): getattr(self, attr.key)
            for attr in self.__mapper__.column_attrs
        }


def _user_fk() -> Mapped[Optional[int]]:
    return mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    age: Mapped[Optional[int]] = mapped_column(Integer)
    height_inches: Mapped[Optional[int]] = mapped_column(Integer)
    weight_lbs: Mapped[Optional[float]] = mapped_column(Float)
    primary_goal: Mapped[Optional[str]] = mapped_column(String(200))
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class Workout(Base):
    __tablename__ = "workouts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[Optional[int]] = _user_fk()
    workout_type: Mapped[str] = mapped_column(String(100), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    calories_burned: Mapped[Optional[int]] = mapped_column(Integer)
    date: Mapped[str] = mapped_column(String(40), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class Exercise(Base):
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    workout_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("workouts.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sets: Mapped[Optional[int]] = mapped_column(Integer)
    reps: Mapped[Optional[int]] = mapped_column(Integer)
    weight_lbs: Mapped[Optional[float]] = mapped_column(Float)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)


class Goal(Base):
    __tablename__ = "goals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[Optional[int]] = _user_fk()
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    target: Mapped[float] = mapped_column(Float, nullable=False)
    current: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    deadline: Mapped[Optional[str]] = mapped_column(String(40))
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="in_progress")
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class WearableDevice(Base):
    __tablename__ = "wearable_devices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[Optional[int]] = _user_fk()
    device_name: Mapped[str] = mapped_column(String(200), nullable=False)
    device_type: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="connected")
    last_sync: Mapped[Optional[str]] = mapped_column(String(40))
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class CommunityPost(Base):
    __tablename__ = "community_posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[Optional[int]] = _user_fk()
    author_name: Mapped[str] = mapped_column(String(200), nullable=False)
    author_avatar: Mapped[Optional[str]] = mapped_column(String(500))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    likes: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class Challenge(Base):
    __tablename__ = "challenges"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    participants_count: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    days_left: Mapped[int] = mapped_column(Integer, nullable=False)
    reward: Mapped[Optional[str]] = mapped_column(String(200))
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class LeaderboardEntry(Base):
    __tablename__ = "leaderboard"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[Optional[int]] = _user_fk()
    user_name: Mapped[str] = mapped_column(String(200), nullable=False)
    user_avatar: Mapped[Optional[str]] = mapped_column(String(500))
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rank: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class WeightRecord(Base):
    __tablename__ = "weight_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[Optional[int]] = _user_fk()
    weight_lbs: Mapped[float] = mapped_column(Float, nullable=False)
    recorded_date: Mapped[str] = mapped_column(String(40), nullable=False)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)


class StatsOverview(Base):
    __tablename__ = "stats_overview"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[Optional[int]] = _user_fk()
    total_workouts: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    calories_burned: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    active_days: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    goals_achieved: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    goals_total: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    last_updated: Mapped[str] = mapped_column(String(40), nullable=False)
