"""Test package. Settings are read at import time, so the environment is prepared here."""

import os
import tempfile

os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="rollcall-uploads-"))
