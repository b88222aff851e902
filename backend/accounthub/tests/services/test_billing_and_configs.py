from datetime import timedelta
from decimal import Decimal

import pytest
from sqlmodel import select

from accounthub.core.exceptions import NotFoundError, ServiceError
from accounthub.models.database.audit_log import AdminAuditLog
from accounthub.models.schemas.app_config import (
    AppConfigCreate,
    AppConfigFilters,
    AppConfigTemplateCreate,
    AppConfigTemplateUpdate,
    TemplateField,
)
from accounthub.models.schemas.membership import MembershipCreate
from accounthub.models.schemas.payment import PaymentCreate, PaymentFilters, PaymentUpdate
from accounthub.models.schemas.payment_config import PaymentConfigCreate, PaymentConfigFilters, PaymentConfigUpdate
from accounthub.services import app_configs, dashboard, memberships, payment_configs, payments
from accounthub.services.base import utcnow
from accounthub.tests.utils.factories import create_random_application, create_random_plan, create_random_user


@pytest.fixture
def membership(db):
    app = create_random_application(db, name="Notes")
    plan = create_random_plan(db, app)
    user = create_random_user(db, app)
    return memberships.create_membership(
        db, MembershipCreate(user_id=user.id, application_id=app.id, membership_plan_id=plan.id)
    )


class TestPayments:
    def test_create_and_read_row(self, db, membership, actor):
        payment = payments.create_payment(
            db,
            PaymentCreate(
                user_id=membership.user_id,
                membership_id=membership.id,
                amount=Decimal("30.00"),
                payment_method="alipay",
                status="success",
            ),
            actor,
        )

        row = payments.get_payment(db, str(payment.id))

        assert row.application_name == "Notes"
        assert row.user_email is not None
        log = db.exec(select(AdminAuditLog).where(AdminAuditLog.action == "CREATE_PAYMENT")).one()
        assert log.details == {"amount": "30.00", "currency": "CNY"}

    def test_update_and_filter(self, db, membership):
        payment = payments.create_payment(
            db, PaymentCreate(user_id=membership.user_id, membership_id=membership.id, amount=Decimal("10"))
        )

        payments.update_payment(db, str(payment.id), PaymentUpdate(status="refunded"))

        assert payments.get_payments(db, filters=PaymentFilters(status="pending")).total == 0
        assert payments.get_payments(db, filters=PaymentFilters(status="refunded")).total == 1

    def test_delete(self, db, membership):
        payment = payments.create_payment(db, PaymentCreate(user_id=membership.user_id, amount=Decimal("1")))
        payments.delete_payment(db, str(payment.id))
        with pytest.raises(NotFoundError):
            payments.get_payment(db, str(payment.id))


class TestPaymentConfigs:
    def test_credentials_stay_out_of_audit(self, db, actor):
        app = create_random_application(db)
        config = payment_configs.create_payment_config(
            db,
            PaymentConfigCreate(application_id=app.id, payment_method="stripe", config={"secret_key": "sk_live"}),
            actor,
        )
        payment_configs.update_payment_config(
            db, str(config.id), PaymentConfigUpdate(config={"secret_key": "sk_rotated"}), actor
        )

        for log in db.exec(select(AdminAuditLog)).all():
            assert "sk_" not in str(log.details)
        row = payment_configs.get_payment_config(db, str(config.id))
        assert row.config == {"secret_key": "sk_rotated"}
        assert row.application_name == app.name

    def test_filter_by_method(self, db):
        payment_configs.create_payment_config(db, PaymentConfigCreate(payment_method="wechat"))
        payment_configs.create_payment_config(db, PaymentConfigCreate(payment_method="epay"))

        page = payment_configs.get_payment_configs(db, filters=PaymentConfigFilters(payment_method="epay"))

        assert page.total == 1
        assert page.data[0].payment_method == "epay"


class TestAppConfigs:
    def test_lookup_by_key_only_when_active(self, db, actor):
        config = app_configs.create_app_config(
            db,
            AppConfigCreate(
                config_key="home_announcement",
                name="Home announcement",
                config_type="announcement",
                config_data={"title": "Hello"},
            ),
            actor,
        )

        assert app_configs.get_app_config_by_key(db, "home_announcement").config_data == {"title": "Hello"}

        app_configs.toggle_app_config(db, str(config.id), False, actor)
        with pytest.raises(NotFoundError):
            app_configs.get_app_config_by_key(db, "home_announcement")

    def test_list_filters(self, db):
        app_configs.create_app_config(db, AppConfigCreate(config_key="llm", name="LLM", config_type="llm_config"))
        app_configs.create_app_config(db, AppConfigCreate(config_key="flags", name="Flags", config_type="feature_flag"))

        assert app_configs.get_app_configs(db).total == 2
        assert app_configs.get_app_configs(db, filters=AppConfigFilters(config_type="llm_config")).total == 1
        assert app_configs.get_app_configs(db, filters=AppConfigFilters(search="FLAG")).total == 1

    def test_duplicate_key(self, db):
        app_configs.create_app_config(db, AppConfigCreate(config_key="same", name="A"))
        with pytest.raises(ServiceError):
            app_configs.create_app_config(db, AppConfigCreate(config_key="same", name="B"))

    def test_templates(self, db, actor):
        template = app_configs.create_template(
            db,
            AppConfigTemplateCreate(
                template_name="announcement",
                display_name="Announcement",
                template_fields=[
                    TemplateField(key="title", label="Title", type="text", required=True),
                    TemplateField(key="level", label="Level", type="select", options=["info", "warning"]),
                ],
                sort_order=2,
            ),
            actor,
        )
        app_configs.create_template(
            db, AppConfigTemplateCreate(template_name="flags", display_name="Feature flags", sort_order=1)
        )

        names = [t.template_name for t in app_configs.get_templates(db)]
        assert names == ["flags", "announcement"]

        fetched = app_configs.get_template_by_name(db, "announcement")
        assert fetched.template_fields[0].required is True
        assert fetched.template_fields[1].options == ["info", "warning"]

        app_configs.update_template(db, str(template.id), AppConfigTemplateUpdate(is_active=False), actor)
        assert [t.template_name for t in app_configs.get_templates(db)] == ["flags"]

        app_configs.delete_template(db, str(template.id), actor)
        with pytest.raises(NotFoundError):
            app_configs.get_template(db, str(template.id))


class TestDashboard:
    def test_empty(self, db):
        stats = dashboard.get_dashboard_stats(db)
        assert stats.total_users == 0
        assert stats.total_revenue == Decimal("0")
        assert dashboard.get_revenue_by_application(db) == []

    def test_counts_and_revenue(self, db, membership):
        old_user = create_random_user(db)
        old_user.created_at = utcnow() - timedelta(days=30)
        db.add(old_user)
        db.commit()
        for amount, status in [("100", "success"), ("50", "success"), ("999", "failed")]:
            payments.create_payment(
                db,
                PaymentCreate(
                    user_id=membership.user_id,
                    membership_id=membership.id,
                    amount=Decimal(amount),
                    status=status,
                ),
            )

        stats = dashboard.get_dashboard_stats(db)
        revenue = dashboard.get_revenue_by_application(db)

        assert stats.total_users == 2
        assert stats.new_users_last_7_days == 1
        assert stats.total_applications == 1
        assert stats.active_applications == 1
        assert stats.active_memberships == 1
        assert stats.total_revenue == Decimal("150")
        assert len(revenue) == 1
        assert revenue[0].application_id == membership.application_id
        assert revenue[0].payment_count == 2
        assert revenue[0].total_revenue == Decimal("150")
