from sqlalchemy.orm import Session
from app.models.user import User, UserRole
from app.services.auth import get_password_hash
import logging
import os

logger = logging.getLogger(__name__)


def create_initial_admin(db: Session):
    """
    Create the platform admin from INITIAL_ADMIN_EMAIL / INITIAL_ADMIN_PASSWORD
    when no admin exists yet.
    """
    email = os.getenv("INITIAL_ADMIN_EMAIL")
    password = os.getenv("INITIAL_ADMIN_PASSWORD")
    if not email or not password:
        logger.info("INITIAL_ADMIN_EMAIL/PASSWORD not set, skipping admin seed.")
        return None

    if db.query(User).filter(User.role == UserRole.ADMIN).first():
        logger.info("An admin already exists, skipping admin seed.")
        return None

    db_user = User(
        name=os.getenv("INITIAL_ADMIN_NAME", "QuickCourt Admin"),
        email=email,
        phone=None,
        hashed_password=get_password_hash(password),
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info(f"Admin created: {email}")
    return db_user
