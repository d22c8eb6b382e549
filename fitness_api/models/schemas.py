"""
Pydantic models for request validation

Bodies arrive with camelCase keys (workoutType, userId); either spelling is
accepted. Create payloads mark the fields the row cannot exist without as
required, update payloads make everything optional so that only the keys the
client sent are written.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def provided(self, *exclude: str) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by attribute name"""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name in type(self).model_fields and name not in exclude
        }


class UserPayload(Payload):
    """User create/update payload, name and email are checked by the route"""
    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None
    height_inches: Optional[int] = None
    weight_lbs: Optional[float] = None
    primary_goal: Optional[str] = None


class WorkoutCreate(Payload):
    workout_type: str
    duration_minutes: int
    date: str
    user_id: Optional[int] = None
    calories_burned: Optional[int] = None
    notes: Optional[str] = None


class WorkoutUpdate(Payload):
    workout_type: Optional[str] = None
    duration_minutes: Optional[int] = None
    date: Optional[str] = None
    user_id: Optional[int] = None
    calories_burned: Optional[int] = None
    notes: Optional[str] = None


class ExerciseCreate(Payload):
    name: str
    workout_id: Optional[int] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight_lbs: Optional[float] = None


class ExerciseUpdate(Payload):
    name: Optional[str] = None
    workout_id: Optional[int] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight_lbs: Optional[float] = None


class GoalCreate(Payload):
    title: str
    target: float
    current: float
    unit: str
    category: str
    user_id: Optional[int] = None
    deadline: Optional[str] = None


class GoalUpdate(Payload):
    title: Optional[str] = None
    target: Optional[float] = None
    current: Optional[float] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    deadline: Optional[str] = None
    status: Optional[str] = None
    user_id: Optional[int] = None


class WearableDeviceCreate(Payload):
    device_name: str
    device_type: str
    user_id: Optional[int] = None
    last_sync: Optional[str] = None


class WearableDeviceUpdate(Payload):
    device_name: Optional[str] = None
    device_type: Optional[str] = None
    status: Optional[str] = None
    last_sync: Optional[str] = None
    user_id: Optional[int] = None


class CommunityPostCreate(Payload):
    author_name: str
    content: str
    category: str
    user_id: Optional[int] = None
    author_avatar: Optional[str] = None


class CommunityPostUpdate(Payload):
    author_name: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    author_avatar: Optional[str] = None
    user_id: Optional[int] = None
    likes: Optional[int] = None  # never written, only the like endpoint changes it


class ChallengeCreate(Payload):
    title: str
    description: str
    days_left: int
    reward: Optional[str] = None


class ChallengeUpdate(Payload):
    title: Optional[str] = None
    description: Optional[str] = None
    days_left: Optional[int] = None
    participants_count: Optional[int] = None
    reward: Optional[str] = None


class LeaderboardCreate(Payload):
    user_name: str
    rank: int
    user_id: Optional[int] = None
    user_avatar: Optional[str] = None


class LeaderboardUpdate(Payload):
    user_name: Optional[str] = None
    user_avatar: Optional[str] = None
    user_id: Optional[int] = None
    points: Optional[int] = None
    rank: Optional[int] = None


class WeightRecordCreate(Payload):
    weight_lbs: float
    recorded_date: str
    user_id: Optional[int] = None


class WeightRecordUpdate(Payload):
    weight_lbs: Optional[float] = None
    recorded_date: Optional[str] = None
    user_id: Optional[int] = None  # only present so the item route can refuse it


class StatsCounters(Payload):
    """Stats overview counters, used for create, overwrite and increment"""
    total_workouts: Optional[int] = None
    calories_burned: Optional[int] = None
    active_days: Optional[int] = None
    goals_achieved: Optional[int] = None
    goals_total: Optional[int] = None


class StatsPayload(StatsCounters):
    user_id: Optional[int] = None
