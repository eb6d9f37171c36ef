"""Test environment: must run before any app module reads settings."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-at-least-32-bytes!")
os.environ.setdefault("JWT_EXPIRE_MINUTES", "1440")
# Minimum bcrypt cost keeps the suite fast; production default is 12.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
