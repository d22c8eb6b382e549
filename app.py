"""
Entry point re-export so `uvicorn app:app` keeps working.

The application lives in fitness_api/main.py:
- fitness_api/models/ - Pydantic payloads
- fitness_api/routes/ - API endpoints, one router per resource
- fitness_api/services/ - Query building and row operations
- fitness_api/database/ - Tables, connection and seeding
- fitness_api/utils/ - Validation and error types
"""

from fitness_api.main import app

__all__ = ['app']
