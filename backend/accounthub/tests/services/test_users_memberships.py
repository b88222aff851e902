import uuid

import pytest
from sqlmodel import select

from accounthub.core.exceptions import NotFoundError, ValidationError
from accounthub.models.database.audit_log import AdminAuditLog
from accounthub.models.schemas.membership import MembershipCreate, MembershipFilters, MembershipUpdate
from accounthub.models.schemas.membership_plan import MembershipPlanFilters
from accounthub.models.schemas.user import UserFilters, UserUpdate
from accounthub.services import membership_plans, memberships, users
from accounthub.tests.utils.factories import create_random_application, create_random_plan, create_random_user


class TestUsers:
    def test_list_with_application(self, db):
        app = create_random_application(db, name="Notes")
        registered = create_random_user(db, app)
        create_random_user(db)

        page = users.get_users(db, filters=UserFilters(application_id=app.id))

        assert page.total == 1
        assert page.data[0].id == registered.id
        assert page.data[0].application_name == "Notes"
        assert users.get_users(db).total == 2

    def test_search(self, db):
        user = create_random_user(db)
        found = users.get_users(db, filters=UserFilters(search=user.email[:10].upper()))
        assert [row.id for row in found.data] == [user.id]

    def test_ban_records_target_email(self, db, actor):
        user = create_random_user(db)

        banned = users.toggle_ban(db, str(user.id), True, actor)

        assert banned.is_banned is True
        log = db.exec(select(AdminAuditLog)).one()
        assert log.action == "BAN_USER"
        assert log.resource_type == "user"
        assert log.resource_id == str(user.id)
        assert log.target_user_email == user.email

    def test_update_user(self, db, actor):
        user = create_random_user(db)
        updated = users.update_user(db, str(user.id), UserUpdate(full_name="Renamed"), actor)
        assert updated.full_name == "Renamed"
        assert users.get_user(db, str(user.id)).full_name == "Renamed"

    def test_bad_ids(self, db):
        with pytest.raises(ValidationError):
            users.get_user(db, "42")
        with pytest.raises(NotFoundError):
            users.toggle_ban(db, str(uuid.uuid4()), True)


class TestMemberships:
    @pytest.fixture
    def setup(self, db):
        app = create_random_application(db, name="Notes")
        plan = create_random_plan(db, app, display_name="Pro Yearly")
        user = create_random_user(db, app)
        return app, plan, user

    def test_create_and_read_row(self, db, setup, actor):
        app, plan, user = setup
        membership = memberships.create_membership(
            db,
            MembershipCreate(user_id=user.id, application_id=app.id, membership_plan_id=plan.id),
            actor,
        )

        row = memberships.get_membership(db, str(membership.id))

        assert membership.started_at is not None
        assert row.user_email == user.email
        assert row.application_name == "Notes"
        assert row.plan_display_name == "Pro Yearly"
        assert row.plan_code == plan.plan_id

    def test_status_update_and_filters(self, db, setup, actor):
        app, plan, user = setup
        membership = memberships.create_membership(
            db, MembershipCreate(user_id=user.id, application_id=app.id), actor
        )

        memberships.update_status(db, str(membership.id), "expired", actor)

        assert memberships.get_memberships(db, filters=MembershipFilters(status="active")).total == 0
        expired = memberships.get_memberships(db, filters=MembershipFilters(status="expired", user_id=user.id))
        assert expired.total == 1
        actions = sorted(db.exec(select(AdminAuditLog.action)).all())
        assert actions == ["CREATE_MEMBERSHIP", "UPDATE_MEMBERSHIP"]

    def test_update_and_delete(self, db, setup):
        app, plan, user = setup
        membership = memberships.create_membership(db, MembershipCreate(user_id=user.id, application_id=app.id))

        updated = memberships.update_membership(
            db, str(membership.id), MembershipUpdate(payment_status="paid", billing_cycle="yearly")
        )
        assert updated.payment_status == "paid"

        memberships.delete_membership(db, str(membership.id))
        with pytest.raises(NotFoundError):
            memberships.get_membership(db, str(membership.id))


class TestMembershipPlans:
    def test_display_order(self, db):
        app = create_random_application(db)
        first = create_random_plan(db, app, display_name="Monthly")
        second = create_random_plan(db, app, display_name="Yearly")

        membership_plans.update_plan_order(db, str(first.id), 10)
        membership_plans.update_plan_order(db, str(second.id), 1)

        page = membership_plans.get_membership_plans(
            db, filters=MembershipPlanFilters(application_id=app.id)
        )
        assert [row.display_name for row in page.data] == ["Yearly", "Monthly"]
        assert page.data[0].application_name == app.name

    def test_filter_inactive(self, db):
        app = create_random_application(db)
        plan = create_random_plan(db, app)
        create_random_plan(db, app)

        membership_plans.update_membership_plan(db, str(plan.id), {"is_active": False})

        inactive = membership_plans.get_membership_plans(db, filters=MembershipPlanFilters(is_active=False))
        assert [row.id for row in inactive.data] == [plan.id]

    def test_delete(self, db, actor):
        plan = create_random_plan(db, create_random_application(db))
        membership_plans.delete_membership_plan(db, str(plan.id), actor)
        with pytest.raises(NotFoundError):
            membership_plans.get_membership_plan(db, str(plan.id))
