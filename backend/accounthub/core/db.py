import logging

from sqlmodel import Session, create_engine, select

from accounthub.core.config import settings
from accounthub.core.security import get_password_hash
from accounthub.models.database.admin import Admin

logger = logging.getLogger(__name__)

engine = create_engine(str(settings.SQLALCHEMY_DATABASE_URI), pool_pre_ping=True)


# Tables are created by the alembic migrations.
# Make sure every model module is imported (accounthub.models) before
# initializing the DB, otherwise SQLModel might fail to set up relationships.

def init_db(session: Session) -> Admin:
    admin = session.exec(
        select(Admin).where(Admin.email == settings.FIRST_ADMIN_EMAIL)
    ).first()
    if not admin:
        admin = Admin(
            email=settings.FIRST_ADMIN_EMAIL,
            hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
            full_name="Administrator",
        )
        session.add(admin)
        session.commit()
        session.refresh(admin)
        logger.info("Created first admin %s", admin.email)
    return admin
