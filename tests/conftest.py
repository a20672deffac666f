import os

# Settings are read at import time; give the app a throwaway configuration.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_PEPPER", "test-pepper")
os.environ.setdefault("REVOCATION_BACKEND", "memory")
