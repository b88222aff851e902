import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from sqlmodel import Session, select

from accounthub.core.exceptions import NotFoundError, ServiceError, ValidationError
from accounthub.models.database.audit_log import AdminAuditLog
from accounthub.models.database.redemption_code import RedemptionCode, RedemptionCodeUse
from accounthub.models.schemas.redemption_code import (
    RedemptionCodeCreate,
    RedemptionCodeExportFilters,
    RedemptionCodeExportRow,
    RedemptionCodeFilters,
    RedemptionCodeUpdate,
)
from accounthub.services import redemption_codes as service
from accounthub.tests.utils.factories import (
    code_template,
    create_random_application,
    create_random_plan,
    create_random_user,
)
from accounthub.tests.utils.utils import CODE_RE


@pytest.fixture
def application(db: Session):
    return create_random_application(db, name="Reader Pro")


@pytest.fixture
def plan(db: Session, application):
    return create_random_plan(db, application, display_name="VIP Monthly")


class TestFormatting:
    def test_format_usage(self):
        assert service.format_usage(0, 1) == "0 / 1"
        assert service.format_usage(3, -1) == "3 / ∞"

    def test_format_export_lines(self):
        """Test export lines are tab separated and show unlimited expiry"""
        rows = [
            RedemptionCodeExportRow(
                id=uuid.uuid4(), code="AAAA-BBBB-CCCC-DDDD", status="active",
                application_name="Reader Pro", plan_name="VIP Monthly", valid_until=None,
            ),
            RedemptionCodeExportRow(
                id=uuid.uuid4(), code="EEEE-FFFF-GGGG-HHHH", status="active",
                valid_until=datetime(2026, 1, 31, 23, 59, 0),
            ),
            RedemptionCodeExportRow(
                id=uuid.uuid4(), code="JJJJ-KKKK-LLLL-MMMM", status="active",
                valid_until=datetime(2026, 2, 1, 8, 0, 0, tzinfo=timezone(timedelta(hours=8))),
            ),
        ]

        text = service.format_export_lines(rows)

        assert text.split("\n") == [
            "AAAA-BBBB-CCCC-DDDD\tReader Pro\tVIP Monthly\t永久有效",
            "EEEE-FFFF-GGGG-HHHH\t-\t-\t2026-01-31 23:59:00 UTC",
            "JJJJ-KKKK-LLLL-MMMM\t-\t-\t2026-02-01 00:00:00 UTC",
        ]
        assert service.format_export_lines(rows[:1], "unlimited").endswith("\tunlimited")
        assert service.format_export_lines([]) == ""


class TestCreate:
    def test_create_generates_code(self, db, application, plan, actor):
        code_in = RedemptionCodeCreate(application_id=application.id, membership_plan_id=plan.id)

        code = service.create_redemption_code(db, code_in, actor)

        assert CODE_RE.match(code.code)
        assert code.current_uses == 0
        assert code.status == "active"
        assert code.code_type == "single"
        assert code.created_by == actor.admin_uuid
        log = db.exec(select(AdminAuditLog).where(AdminAuditLog.action == "CREATE_REDEMPTION_CODE")).one()
        assert log.resource_id == str(code.id)
        assert log.ip_address == "127.0.0.1"

    def test_create_with_own_code(self, db, application, plan):
        code_in = RedemptionCodeCreate(
            application_id=application.id,
            membership_plan_id=plan.id,
            code="SPRING-SALE",
            auto_generate=False,
        )
        assert service.create_redemption_code(db, code_in).code == "SPRING-SALE"

    def test_own_code_required_without_auto_generate(self, application, plan):
        with pytest.raises(ValueError):
            RedemptionCodeCreate(
                application_id=application.id, membership_plan_id=plan.id, auto_generate=False,
            )

    def test_duplicate_code_fails(self, db, application, plan):
        code_in = RedemptionCodeCreate(
            application_id=application.id, membership_plan_id=plan.id,
            code="DUPLICATE", auto_generate=False,
        )
        service.create_redemption_code(db, code_in)

        with pytest.raises(ServiceError) as exc_info:
            service.create_redemption_code(db, code_in)
        assert exc_info.value.operation == "create_redemption_code"
        assert str(exc_info.value).startswith("operation failed: ")


class TestBatchCreate:
    def test_batch_shares_template(self, db, application, plan, actor):
        """Test every code of a batch carries the template and a distinct code"""
        valid_until = datetime.now(timezone.utc) + timedelta(days=90)
        template = code_template(
            application, plan, max_uses=3, valid_until=valid_until, description="Launch promo",
        )

        codes = service.batch_create_redemption_codes(db, 5, template, actor)

        assert len(codes) == 5
        assert len({code.code for code in codes}) == 5
        for code in codes:
            assert CODE_RE.match(code.code)
            assert code.application_id == application.id
            assert code.membership_plan_id == plan.id
            assert code.code_type == "batch"
            assert code.max_uses == 3
            assert code.current_uses == 0
            assert code.status == "active"
            assert code.description == "Launch promo"
            assert code.valid_until is not None

        log = db.exec(
            select(AdminAuditLog).where(AdminAuditLog.action == "BATCH_CREATE_REDEMPTION_CODES")
        ).one()
        assert log.details["count"] == 5
        assert sorted(log.details["code_ids"]) == sorted(str(code.id) for code in codes)

    def test_batch_without_expiry_exports_as_unlimited(self, db, application, plan):
        service.batch_create_redemption_codes(db, 5, code_template(application, plan))

        rows = service.export_redemption_codes(db)
        lines = service.format_export_lines(rows).split("\n")

        assert len(lines) == 5
        for line in lines:
            code, app_name, plan_name, expiry = line.split("\t")
            assert CODE_RE.match(code)
            assert app_name == "Reader Pro"
            assert plan_name == "VIP Monthly"
            assert expiry == "永久有效"

    def test_duplicate_in_batch_inserts_nothing(self, db, application, plan):
        """Test a batch is all or nothing when one generated code collides"""
        service.create_redemption_code(
            db,
            RedemptionCodeCreate(
                application_id=application.id, membership_plan_id=plan.id,
                code="AAAA-BBBB-CCCC-DDDD", auto_generate=False,
            ),
        )
        generated = iter(["QQQQ-RRRR-SSSS-TTTT", "AAAA-BBBB-CCCC-DDDD", "WWWW-XXXX-YYYY-ZZZZ"])

        with patch.object(service, "generate_redemption_code", side_effect=lambda: next(generated)):
            with pytest.raises(ServiceError):
                service.batch_create_redemption_codes(db, 3, code_template(application, plan))

        assert service.get_redemption_code_stats(db).total == 1


class TestReads:
    def test_list_with_joined_fields(self, db, application, plan):
        service.batch_create_redemption_codes(db, 3, code_template(application, plan, max_uses=-1))

        page = service.get_redemption_codes(db, page=1, page_size=2)

        assert page.total == 3
        assert len(page.data) == 2
        row = page.data[0]
        assert row.application_name == "Reader Pro"
        assert row.application_slug == application.slug
        assert row.plan_display_name == "VIP Monthly"
        assert row.plan_code == plan.plan_id
        assert row.usage_display == "0 / ∞"

    def test_list_filters(self, db, application, plan):
        other_app = create_random_application(db)
        other_plan = create_random_plan(db, other_app)
        service.batch_create_redemption_codes(db, 2, code_template(application, plan))
        service.batch_create_redemption_codes(db, 1, code_template(other_app, other_plan, status="disabled"))

        by_app = service.get_redemption_codes(db, filters=RedemptionCodeFilters(application_id=application.id))
        by_status = service.get_redemption_codes(db, filters=RedemptionCodeFilters(status="disabled"))

        assert by_app.total == 2
        assert by_status.total == 1
        assert by_status.data[0].application_id == other_app.id

    def test_search(self, db, application, plan):
        service.create_redemption_code(
            db,
            RedemptionCodeCreate(
                application_id=application.id, membership_plan_id=plan.id,
                code="WELCOME-2026", auto_generate=False,
            ),
        )
        service.batch_create_redemption_codes(db, 2, code_template(application, plan))

        page = service.get_redemption_codes(db, filters=RedemptionCodeFilters(search="welcome"))

        assert [row.code for row in page.data] == ["WELCOME-2026"]

    def test_page_parameters_are_clamped(self, db, application, plan):
        service.batch_create_redemption_codes(db, 2, code_template(application, plan))
        page = service.get_redemption_codes(db, page=0, page_size=1000)
        assert page.page == 1
        assert page.page_size == 100
        assert page.total == 2

    def test_get_single_code(self, db, application, plan):
        code = service.batch_create_redemption_codes(db, 1, code_template(application, plan))[0]
        row = service.get_redemption_code(db, str(code.id))
        assert row.code == code.code
        assert row.plan_display_name == "VIP Monthly"

    def test_malformed_ids_are_rejected(self, db):
        with pytest.raises(ValidationError):
            service.get_redemption_code(db, "not-a-uuid")
        with pytest.raises(ValidationError):
            service.delete_redemption_code(db, "123")
        with pytest.raises(ValidationError):
            service.get_redemption_code_stats(db, "abc")

    def test_missing_code(self, db):
        with pytest.raises(NotFoundError):
            service.get_redemption_code(db, str(uuid.uuid4()))


class TestStats:
    def test_status_counts(self, db, application, plan):
        """Test per-status counts never exceed the total"""
        service.batch_create_redemption_codes(db, 3, code_template(application, plan))
        service.batch_create_redemption_codes(db, 2, code_template(application, plan, status="expired"))
        service.batch_create_redemption_codes(db, 1, code_template(application, plan, status="exhausted"))
        service.batch_create_redemption_codes(db, 4, code_template(application, plan, status="disabled"))

        stats = service.get_redemption_code_stats(db)

        assert stats.total == 10
        assert (stats.active, stats.expired, stats.exhausted) == (3, 2, 1)
        assert stats.active + stats.expired + stats.exhausted <= stats.total

    def test_scoped_to_application(self, db, application, plan):
        empty_app = create_random_application(db)
        service.batch_create_redemption_codes(db, 2, code_template(application, plan))

        assert service.get_redemption_code_stats(db, str(application.id)).total == 2
        stats = service.get_redemption_code_stats(db, str(empty_app.id))
        assert (stats.total, stats.active, stats.expired, stats.exhausted) == (0, 0, 0, 0)

    def test_status_is_not_derived(self, db, application, plan):
        """Test a lapsed or used-up code keeps the status it was given"""
        past = datetime.now(timezone.utc) - timedelta(days=1)
        code = service.batch_create_redemption_codes(
            db, 1, code_template(application, plan, valid_until=past)
        )[0]
        service.update_redemption_code(db, str(code.id), RedemptionCodeUpdate(current_uses=1))

        stats = service.get_redemption_code_stats(db)
        assert stats.active == 1
        assert stats.expired == 0
        assert stats.exhausted == 0


class TestExport:
    def test_filtered_export_is_subset(self, db, application, plan):
        other_app = create_random_application(db)
        other_plan = create_random_plan(db, other_app)
        service.batch_create_redemption_codes(db, 3, code_template(application, plan))
        service.batch_create_redemption_codes(db, 2, code_template(other_app, other_plan, status="expired"))

        everything = {row.id for row in service.export_redemption_codes(db)}
        by_app = service.export_redemption_codes(
            db, RedemptionCodeExportFilters(application_id=application.id)
        )
        by_status = service.export_redemption_codes(db, RedemptionCodeExportFilters(status="expired"))

        assert len(everything) == 5
        assert {row.id for row in by_app} <= everything
        assert len(by_app) == 3
        assert all(row.status == "expired" for row in by_status)
        assert len(by_status) == 2

    def test_export_empty(self, db):
        assert service.export_redemption_codes(db) == []


class TestUpdateDelete:
    def test_update_changes_fields_and_stamps(self, db, application, plan, actor):
        code = service.batch_create_redemption_codes(db, 1, code_template(application, plan))[0]
        before = code.updated_at

        updated = service.update_redemption_code(
            db, str(code.id), RedemptionCodeUpdate(status="disabled", is_active=False), actor
        )

        assert updated.status == "disabled"
        assert updated.is_active is False
        assert updated.max_uses == 1
        assert updated.updated_at >= before
        log = db.exec(select(AdminAuditLog).where(AdminAuditLog.action == "UPDATE_REDEMPTION_CODE")).one()
        assert log.details == {"updates": {"status": "disabled", "is_active": False}}

    def test_delete(self, db, application, plan, actor):
        code = service.batch_create_redemption_codes(db, 1, code_template(application, plan))[0]
        code_id = str(code.id)

        service.delete_redemption_code(db, code_id, actor)

        assert db.get(RedemptionCode, uuid.UUID(code_id)) is None
        with pytest.raises(NotFoundError):
            service.delete_redemption_code(db, code_id, actor)


class TestUses:
    def test_uses_include_user(self, db, application, plan):
        code = service.batch_create_redemption_codes(db, 1, code_template(application, plan, max_uses=5))[0]
        user = create_random_user(db, application)
        db.add(RedemptionCodeUse(redemption_code_id=code.id, user_id=user.id, ip_address="10.0.0.1"))
        db.commit()

        page = service.get_redemption_code_uses(db, str(code.id))

        assert page.total == 1
        assert page.data[0].user_email == user.email
        assert page.data[0].membership_status is None

    def test_uses_of_unused_code(self, db, application, plan):
        code = service.batch_create_redemption_codes(db, 1, code_template(application, plan))[0]
        assert service.get_redemption_code_uses(db, str(code.id)).total == 0
