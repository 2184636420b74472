import os

# Settings are read once and cached, so the test environment has to be in
# place before anything under libs/ or services/ is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("ADMIN_EMAIL", None)

from libs.common.config import get_settings  # noqa: E402

get_settings.cache_clear()
