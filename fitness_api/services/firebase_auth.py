"""
Firebase Authentication - verify bearer ID tokens.

Primary mode:
    - Firebase Admin SDK with a service account (FIREBASE_SERVICE_ACCOUNT_JSON).

Fallback mode (no service account configured):
    - Decode the JWT with PyJWT without verifying the signature. Only meant for
      local development and tests.
"""
import json
from typing import Optional

import firebase_admin
import jwt
from firebase_admin import auth, credentials

from fitness_api.config import settings

_firebase_initialized = False


def _init_firebase() -> bool:
    """Initialize Firebase Admin SDK from settings."""
    global _firebase_initialized
    if _firebase_initialized:
        return True

    credentials_json = settings.FIREBASE_SERVICE_ACCOUNT_JSON
    if not credentials_json:
        return False

    try:
        cred = credentials.Certificate(json.loads(credentials_json))
        firebase_admin.initialize_app(cred)
        _firebase_initialized = True
        print("Firebase Admin initialized successfully")
        return True
    except Exception as e:
        print(f"Firebase init failed: {e}")
        return False


def _decode_without_verification(id_token: str) -> Optional[dict]:
    """Fallback: trust the token payload as-is."""
    try:
        return jwt.decode(
            id_token,
            options={
                "verify_signature": False,
                "verify_exp": False,
                "verify_aud": False,
            },
        )
    except jwt.PyJWTError as e:
        print(f"Token decode without verification failed: {e}")
        return None


def verify_id_token(id_token: str) -> Optional[dict]:
    """
    Verify an ID token and return its claims.

    Returns:
        dict with uid, email, etc. or None if invalid.
    """
    if _init_firebase():
        try:
            return auth.verify_id_token(id_token)
        except Exception as e:
            print(f"Token verification via Firebase Admin failed: {e}")
            return None

    return _decode_without_verification(id_token)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[7:].strip()
    return token or None
