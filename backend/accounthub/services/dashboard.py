from datetime import timedelta
from decimal import Decimal
from typing import List

from sqlmodel import Session, func, select

from accounthub.models.database.application import Application
from accounthub.models.database.membership import UserAppMembership
from accounthub.models.database.payment import PaymentHistory
from accounthub.models.database.user import User
from accounthub.models.schemas.dashboard import ApplicationRevenue, DashboardStats
from accounthub.services.base import backend_call, utcnow

PAID_STATUS = "success"


def get_dashboard_stats(session: Session) -> DashboardStats:
    """Headline figures for the overview page. Revenue counts successful payments only."""
    week_ago = utcnow() - timedelta(days=7)
    with backend_call(session, "get_dashboard_stats"):
        total_users = session.exec(select(func.count()).select_from(User)).one()
        new_users = session.exec(
            select(func.count()).select_from(User).where(User.created_at >= week_ago)
        ).one()
        total_apps = session.exec(select(func.count()).select_from(Application)).one()
        active_apps = session.exec(
            select(func.count()).select_from(Application).where(Application.is_active == True)  # noqa: E712
        ).one()
        active_memberships = session.exec(
            select(func.count()).select_from(UserAppMembership).where(UserAppMembership.status == "active")
        ).one()
        revenue = session.exec(
            select(func.coalesce(func.sum(PaymentHistory.amount), 0)).where(PaymentHistory.status == PAID_STATUS)
        ).one()
    return DashboardStats(
        total_users=total_users,
        new_users_last_7_days=new_users,
        total_applications=total_apps,
        active_applications=active_apps,
        active_memberships=active_memberships,
        total_revenue=Decimal(str(revenue)),
    )


def get_revenue_by_application(session: Session) -> List[ApplicationRevenue]:
    """Successful payment totals per application, highest first."""
    total = func.coalesce(func.sum(PaymentHistory.amount), 0)
    statement = (
        select(Application.id, Application.name, func.count(PaymentHistory.id), total)
        .join(UserAppMembership, UserAppMembership.application_id == Application.id)
        .join(PaymentHistory, PaymentHistory.membership_id == UserAppMembership.id)
        .where(PaymentHistory.status == PAID_STATUS)
        .group_by(Application.id, Application.name)
        .order_by(total.desc())
    )
    with backend_call(session, "get_revenue_by_application"):
        rows = session.exec(statement).all()
    return [
        ApplicationRevenue(
            application_id=app_id,
            application_name=name,
            payment_count=count,
            total_revenue=Decimal(str(amount)),
        )
        for app_id, name, count, amount in rows
    ]
