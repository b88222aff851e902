from decimal import Decimal
from typing import Optional

from sqlmodel import Session

from accounthub.models.database.application import Application
from accounthub.models.database.membership_plan import MembershipPlan
from accounthub.models.database.user import User
from accounthub.models.schemas.application import ApplicationCreate
from accounthub.models.schemas.membership_plan import MembershipPlanCreate
from accounthub.models.schemas.redemption_code import RedemptionCodeTemplate
from accounthub.services import applications, membership_plans
from accounthub.tests.utils.utils import random_email, random_lower_string, random_slug


def create_random_application(db: Session, name: Optional[str] = None) -> Application:
    app_in = ApplicationCreate(name=name or random_lower_string(), slug=random_slug())
    return applications.create_application(db, app_in)


def create_random_plan(
    db: Session,
    application: Application,
    display_name: str = "VIP Monthly",
    price: str = "19.90",
) -> MembershipPlan:
    plan_in = MembershipPlanCreate(
        application_id=application.id,
        plan_id=f"vip_{random_slug()}",
        name=random_lower_string(),
        display_name=display_name,
        price=Decimal(price),
        duration_days=30,
        billing_cycle="monthly",
    )
    return membership_plans.create_membership_plan(db, plan_in)


def create_random_user(db: Session, application: Optional[Application] = None) -> User:
    user = User(
        email=random_email(),
        full_name="Test User",
        registered_from_app_id=application.id if application else None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def code_template(application: Application, plan: MembershipPlan, **kwargs) -> RedemptionCodeTemplate:
    return RedemptionCodeTemplate(
        application_id=application.id,
        membership_plan_id=plan.id,
        **kwargs,
    )
