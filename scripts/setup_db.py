"""
Database Setup Script
Creates database tables and optionally seeds a demo channel and video
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR))

from src.app.database import db_manager, reset_database
from src.app.config import get_config, validate_config, setup_logging
from src.app.models import User, Channel, Video
from src.services import AuthService


async def seed_demo_data() -> None:
    """Create an uploader with a channel and one video, plus a viewer session"""
    async with db_manager.session() as session:
        uploader = User(username="demo_creator", name="Demo Creator", email="creator@example.com", role="creator")
        viewer = User(username="demo_viewer", name="Demo Viewer", email="viewer@example.com")
        session.add_all([uploader, viewer])
        await session.flush()

        channel = Channel(user_id=uploader.id, name="Demo Channel", handle="@demo")
        session.add(channel)
        await session.flush()
        uploader.channel_id = channel.id

        video = Video(
            user_id=uploader.id,
            channel_id=channel.id,
            title="Welcome to RumPlay",
            category="Entertainment",
            tags='["demo"]',
        )
        session.add(video)
        await session.commit()

        login = await AuthService(session).open_session(viewer.id)

        print(f"  • channel_id: {channel.id}")
        print(f"  • video_id:   {video.id}")
        print(f"  • viewer token: {login.token}")


async def main(seed: bool, reset: bool = False) -> int:
    """Initialize database and validate configuration"""
    print("=" * 60)
    print("🔧 RumPlay - Database Setup")
    print("=" * 60)

    setup_logging()

    print("\n🔍 Validating Configuration...")
    validation = validate_config()

    if not validation["valid"]:
        print("\n❌ Configuration validation failed:")
        for error in validation["errors"]:
            print(f"  - {error}")
        return 1

    for warning in validation["warnings"]:
        print(f"  ⚠️  {warning}")

    config = get_config()
    print(f"\n📦 Using database: {config.database.url}")

    try:
        print("\n🔌 Testing database connection...")
        await db_manager.ping()
        print("✅ Database connection successful")

        if reset:
            print("\n🧨 Dropping and recreating all tables...")
            await reset_database()
        else:
            print("\n📊 Creating database tables...")
            await db_manager.create_tables()

        if seed:
            print("\n🌱 Seeding demo data...")
            await seed_demo_data()
    finally:
        await db_manager.close()

    print("\n" + "=" * 60)
    print("✅ Database setup complete!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create RumPlay database tables")
    parser.add_argument("--seed", action="store_true", help="Insert demo data")
    parser.add_argument("--reset", action="store_true", help="Drop all tables first (destroys data)")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.seed, args.reset)))
