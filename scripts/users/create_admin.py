"""Create an admin account, or promote an existing one.

Usage:
    ENV_FILE=.env python scripts/users/create_admin.py pastor@example.com "Pastor Ade" <password>
"""

import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load env file before importing libs that use get_settings()
project_root = Path(__file__).resolve().parents[2]
sys.path.append(str(project_root))
load_dotenv(project_root / os.environ.get("ENV_FILE", ".env"), override=True)

from libs.db.config import AsyncSessionLocal  # noqa: E402
from services.auth_service import service as auth_service  # noqa: E402
from services.auth_service.models import UserRole  # noqa: E402
from services.auth_service.schemas import RegisterRequest  # noqa: E402


async def create_admin_user(email: str, name: str, password: str) -> None:
    print("🚀 Starting Admin User Creation Script")

    async with AsyncSessionLocal() as db:
        user = await auth_service.get_user_by_email(db, email)
        if user is None:
            user = await auth_service.register(
                db, RegisterRequest(name=name, email=email, password=password)
            )
            print(f"✅ Account created: {user.id}")

        if user.role != UserRole.ADMIN:
            user.role = UserRole.ADMIN
            await db.commit()
            print(f"✅ Promoted {user.email} to admin")
        else:
            print(f"⚠️ {user.email} is already an admin")


if __name__ == "__main__":
    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(1)
    asyncio.run(create_admin_user(*sys.argv[1:]))
