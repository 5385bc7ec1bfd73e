"""
Initial data seeding script
Usage: python run_seed.py

Creates the tables and the first admin account (ADMIN_USERNAME / ADMIN_PASSWORD)
when it does not exist yet.
"""
import sys
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from salon import config
from salon.database import Base, SessionLocal, engine
from salon.models import User
from salon.security_utils import hash_password

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def run_seed():
    """Create tables and the initial admin account"""
    Base.metadata.create_all(bind=engine, checkfirst=True)

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.username == config.ADMIN_USERNAME).first()
        if existing:
            logger.info(f"Admin '{config.ADMIN_USERNAME}' already exists (id: {existing.id}), nothing to do")
            return

        admin = User(
            username=config.ADMIN_USERNAME,
            password_hash=hash_password(config.ADMIN_PASSWORD),
            name=config.ADMIN_NAME,
            email=config.ADMIN_EMAIL,
            role="admin",
        )
        db.add(admin)
        db.commit()
        logger.info(f"✅ Created admin '{config.ADMIN_USERNAME}' (id: {admin.id})")
        if config.ADMIN_PASSWORD == "admin123":
            logger.warning("⚠️ The admin uses the default password. Change it before going live!")
    finally:
        db.close()


if __name__ == "__main__":
    try:
        run_seed()
    except Exception as e:
        logger.error(f"❌ Seeding failed: {e}")
        sys.exit(1)
