"""
Main FastAPI application
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitness_api.config import settings
from fitness_api.database.connection import create_tables, dispose_database, init_database, is_initialized
from fitness_api.error_handlers import register_error_handlers
from fitness_api.routes import (
    challenges,
    community_posts,
    exercises,
    goals,
    health,
    leaderboard,
    stats_overview,
    users,
    wearable_devices,
    weight_history,
    workouts,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES and is_initialized():
        await create_tables()
    yield
    await dispose_database()


# Create FastAPI app
app = FastAPI(
    title="Fitness Tracker API",
    description="Backend API for the fitness dashboard: workouts, goals, devices, community and stats",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)

register_error_handlers(app)

# Initialize database
init_database()

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(users.router, tags=["Users"])
app.include_router(workouts.router, tags=["Workouts"])
app.include_router(exercises.router, tags=["Exercises"])
app.include_router(goals.router, tags=["Goals"])
app.include_router(wearable_devices.router, tags=["Wearable Devices"])
app.include_router(community_posts.router, tags=["Community"])
app.include_router(challenges.router, tags=["Challenges"])
app.include_router(leaderboard.router, tags=["Leaderboard"])
app.include_router(weight_history.router, tags=["Weight History"])
app.include_router(stats_overview.router, tags=["Stats"])
