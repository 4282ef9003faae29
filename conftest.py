import os

# Default to an in-memory SQLite database and a fixed key for tests
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "x" * 32)
os.environ.setdefault("APP_ENV", "test")
