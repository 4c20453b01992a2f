"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_optional_int_env(name: str) -> int | None:
    """Parse integer from environment variable, None when unset or invalid."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DATABASE_URL = os.environ.get("DATABASE_URL")
if DATABASE_URL is None:
    DB_DIR.mkdir(parents=True, exist_ok=True)
    DATABASE_URL = f"sqlite:///{DB_DIR / 'dotest.db'}"

# Seconds a content read may wait on a locked SQLite database
DB_TIMEOUT_SECONDS = _parse_int_env("DB_TIMEOUT_SECONDS", 15)

# Test sessions
SESSION_QUESTION_LIMIT = _parse_int_env("SESSION_QUESTION_LIMIT", 10)
PASS_THRESHOLD_PERCENT = _parse_int_env("PASS_THRESHOLD_PERCENT", 70)
SESSION_RANDOM_SEED = _parse_optional_int_env("SESSION_RANDOM_SEED")

# "skip" leaves malformed questions out of a session,
# "first_option" treats their first populated option as correct.
MALFORMED_ANSWER_POLICY = os.environ.get("MALFORMED_ANSWER_POLICY", "skip")
MALFORMED_ANSWER_POLICIES = {"skip", "first_option"}
if MALFORMED_ANSWER_POLICY not in MALFORMED_ANSWER_POLICIES:
    MALFORMED_ANSWER_POLICY = "skip"

# Abandoned session cleanup
SESSION_IDLE_MINUTES = _parse_int_env("SESSION_IDLE_MINUTES", 120)
SESSION_CLEANUP_INTERVAL_SECONDS = _parse_int_env(
    "SESSION_CLEANUP_INTERVAL_SECONDS", 10 * 60
)

# Textbook and chapter listing cache
CONTENT_CACHE_TTL_SECONDS = _parse_int_env("CONTENT_CACHE_TTL_SECONDS", 300)
CONTENT_CACHE_MAX_ENTRIES = _parse_int_env("CONTENT_CACHE_MAX_ENTRIES", 256)
