"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real Supabase project or database
os.environ.setdefault("HISTORY_BACKEND", "none")
os.environ.setdefault("SUPABASE_URL", "")
os.environ.setdefault("SUPABASE_ANON_KEY", "")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")
