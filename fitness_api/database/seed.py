"""
Sample data for a fresh database

Run with:
    python -m fitness_api.database.seed
"""
import asyncio
import random
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy import func, select

from fitness_api.database import connection
from fitness_api.database.tables import (
    Challenge,
    CommunityPost,
    Exercise,
    Goal,
    LeaderboardEntry,
    StatsOverview,
    User,
    WearableDevice,
    WeightRecord,
    Workout,
)


def _iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _day(value: str) -> str:
    return _iso(datetime.fromisoformat(value).replace(tzinfo=timezone.utc))


USERS = [
    ("Sarah Johnson", "sarah.j@fitness.com", 28, 65, 145, "Weight Loss", "2024-10-15"),
    ("Mike Chen", "mike.chen@gym.com", 35, 72, 190, "Muscle Gain", "2024-10-22"),
    ("Emily Rodriguez", "emily.r@health.net", 42, 62, 130, "Cardio Endurance", "2024-11-05"),
    ("James Wilson", "james.w@fit.io", 25, 70, 175, "General Fitness", "2024-11-18"),
    ("Lisa Thompson", "lisa.t@wellness.com", 31, 68, 155, "Strength Training", "2024-12-02"),
]

WORKOUTS = [
    (1, "Strength Training", 60, 420, "2024-01-15", "Upper and lower body compound lifts"),
    (2, "HIIT", 30, 380, "2024-01-16", "Tabata intervals"),
    (3, "Strength Training", 55, 400, "2024-01-17", None),
]

EXERCISES = [
    (1, "Bench Press", 4, 10, 185, "2024-01-15T08:30:00"),
    (1, "Squats", 4, 8, 225, "2024-01-15T08:45:00"),
    (1, "Bicep Curls", 3, 12, 35, "2024-01-15T09:00:00"),
    (2, "Burpees", 4, 15, None, "2024-01-16T07:00:00"),
    (2, "Mountain Climbers", 3, 45, None, "2024-01-16T07:20:00"),
    (3, "Deadlifts", 4, 6, 315, "2024-01-17T08:00:00"),
    (3, "Shoulder Press", 3, 10, 95, "2024-01-17T08:20:00"),
]

GOALS = [
    (1, "Lose 10 pounds", 10, 6, "lbs", "2025-03-01", "weight"),
    (2, "Bench press 225", 225, 185, "lbs", "2025-04-15", "strength"),
    (3, "Run a half marathon", 13.1, 8, "miles", "2025-05-20", "cardio"),
    (4, "Work out 20 days this month", 20, 12, "days", None, "consistency"),
]

DEVICES = [
    (1, "Apple Watch Series 9", "smartwatch", "connected", 18, "2024-01-10"),
    (2, "Fitbit Charge 6", "fitness tracker", "connected", 8, "2024-01-15"),
    (3, "Garmin Forerunner 265", "running watch", "connected", 4, "2024-01-20"),
    (4, "Whoop 4.0", "recovery band", "connected", 1.5, "2024-02-01"),
    (5, "Oura Ring Gen 3", "sleep tracker", "disconnected", 72, "2024-01-25"),
    (1, "Strava", "app", "connected", 0.75, "2024-02-05"),
]

POSTS = [
    (1, "Sarah Johnson", "Down 6 pounds this month! Consistency beats intensity.", "progress", 24),
    (2, "Mike Chen", "Finally hit a 185 bench for 10 reps. Next stop 225.", "strength", 31),
    (3, "Emily Rodriguez", "Anyone else training for the spring half marathon?", "running", 12),
]

CHALLENGES = [
    ("30-Day Plank Challenge",
     "Build core strength by holding a plank for 5 minutes by the end of the month. "
     "Start with 30 seconds and progressively increase your hold time each day.",
     156, 12, "Challenge Badge", "2024-11-01", "2024-11-18"),
    ("10K Steps Daily",
     "Walk 10,000 steps every single day for 2 weeks. Track your progress with your "
     "wearable device and stay consistent to win!",
     423, 8, "$25 Gift Card", "2024-11-05", "2024-11-22"),
    ("100 Pushups Challenge",
     "Build up to 100 consecutive pushups through a structured training program. "
     "Perfect your form and gradually increase reps each week.",
     89, 25, "Strength Master Badge", "2024-10-28", "2024-11-05"),
    ("No Sugar November",
     "Eliminate all added sugar from your diet for 30 days. Focus on whole foods and "
     "natural sweetness. Transform your nutrition habits!",
     234, 18, "Nutrition Champion Badge", "2024-11-01", "2024-11-12"),
    ("5K Training Program",
     "Train for and complete a 5K race! Follow our progressive training plan designed "
     "for beginners to experienced runners. Race day is coming soon!",
     312, 3, "Race Registration Reimbursement", "2024-10-15", "2024-11-27"),
    ("Yoga 21-Day Transform",
     "Commit to daily yoga practice for 21 days and experience improved flexibility, "
     "strength, and mindfulness. All levels welcome!",
     178, 15, "Free Premium Month", "2024-11-08", "2024-11-15"),
]

LEADERBOARD = [
    (1, "Sarah Johnson", 3450, 1),
    (2, "Mike Chen", 2890, 2),
    (3, "Emily Rodriguez", 2650, 3),
    (4, "Lisa Thompson", 2120, 4),
    (5, "James Wilson", 1875, 5),
]

STATS = [
    (1, 32, 12450, 45, 3, 5, 2),
    (2, 28, 9800, 38, 2, 4, 5),
    (3, 25, 11200, 35, 2, 3, 8),
    (4, 18, 6500, 24, 1, 3, 12),
    (5, 22, 8900, 30, 2, 4, 18),
]

# user id, start weight, end weight, fluctuation
WEIGHT_TRENDS = [
    (1, 155, 145, 0.3),
    (2, 185, 190, 0.3),
    (3, 130, 130, 2),
    (4, 182, 175, 0.3),
    (5, 155, 155, 2),
]


def weekly_weights(user_id: int, start: float, end: float, fluctuation: float, now: datetime, weeks: int = 8) -> List[WeightRecord]:
    """One weigh-in per week for the last `weeks` weeks, drifting from start to end"""
    first = now - timedelta(weeks=weeks)
    step = (end - start) / weeks
    records = []
    for week in range(weeks):
        recorded = first + timedelta(weeks=week)
        weight = start + step * week + random.uniform(-fluctuation, fluctuation)
        records.append(WeightRecord(
            user_id=user_id,
            weight_lbs=round(weight, 1),
            recorded_date=recorded.date().isoformat(),
            created_at=_iso(recorded),
        ))
    return records


def build_rows(now: datetime) -> List[list]:
    """Rows grouped so that every parent batch is flushed before its children"""
    users = [
        User(name=name, email=email, age=age, height_inches=height, weight_lbs=weight,
             primary_goal=goal, created_at=_day(joined), updated_at=_day(joined))
        for name, email, age, height, weight, goal, joined in USERS
    ]
    workouts = [
        Workout(user_id=user_id, workout_type=kind, duration_minutes=minutes, calories_burned=calories,
                date=date, notes=notes, created_at=_day(date), updated_at=_day(date))
        for user_id, kind, minutes, calories, date, notes in WORKOUTS
    ]
    exercises = [
        Exercise(workout_id=workout_id, name=name, sets=sets, reps=reps, weight_lbs=weight,
                 created_at=_day(created))
        for workout_id, name, sets, reps, weight, created in EXERCISES
    ]

    stamp = _iso(now)
    three_months_ago = _iso(now - timedelta(days=90))
    others = [
        Goal(user_id=user_id, title=title, target=target, current=current, unit=unit, deadline=deadline,
             category=category, status="in_progress", created_at=stamp, updated_at=stamp)
        for user_id, title, target, current, unit, deadline, category in GOALS
    ]
    others += [
        WearableDevice(user_id=user_id, device_name=name, device_type=kind, status=device_status,
                       last_sync=_iso(now - timedelta(hours=hours_ago)), created_at=_day(added), updated_at=stamp)
        for user_id, name, kind, device_status, hours_ago, added in DEVICES
    ]
    others += [
        CommunityPost(user_id=user_id, author_name=author, content=content, category=category, likes=likes,
                      created_at=stamp, updated_at=stamp)
        for user_id, author, content, category, likes in POSTS
    ]
    others += [
        Challenge(title=title, description=description, participants_count=participants, days_left=days_left,
                  reward=reward, created_at=_day(created), updated_at=_day(updated))
        for title, description, participants, days_left, reward, created, updated in CHALLENGES
    ]
    others += [
        LeaderboardEntry(user_id=user_id, user_name=name,
                         user_avatar=f"https://api.dicebear.com/7.x/avataaars/svg?seed={name.split()[0]}",
                         points=points, rank=rank, created_at=three_months_ago, updated_at=stamp)
        for user_id, name, points, rank in LEADERBOARD
    ]
    others += [
        StatsOverview(user_id=user_id, total_workouts=workouts_done, calories_burned=calories,
                      active_days=active_days, goals_achieved=achieved, goals_total=total,
                      last_updated=_iso(now - timedelta(hours=hours_ago)))
        for user_id, workouts_done, calories, active_days, achieved, total, hours_ago in STATS
    ]
    for user_id, start, end, fluctuation in WEIGHT_TRENDS:
        others += weekly_weights(user_id, start, end, fluctuation, now)

    return [users, workouts, exercises, others]


async def seed() -> bool:
    """
    Insert sample data unless the users table already has rows

    Returns:
        True if rows were inserted, False if seeding was skipped
    """
    session_maker = connection.get_session()
    if not session_maker:
        print("Warning: DATABASE_URL not set, nothing to seed")
        return False

    async with session_maker() as session:
        existing = await session.scalar(select(func.count()).select_from(User))
        if existing:
            print(f"Skipping seed: {existing} users already present")
            return False

        for batch in build_rows(datetime.now(timezone.utc)):
            session.add_all(batch)
            await session.flush()
            print(f"Seeded {len(batch)} rows")
        await session.commit()

    print("Seeding completed successfully")
    return True


async def main() -> None:
    if not connection.init_database():
        return
    try:
        await connection.create_tables()
        await seed()
    finally:
        await connection.dispose_database()


if __name__ == "__main__":
    asyncio.run(main())
