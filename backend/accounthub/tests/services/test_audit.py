import uuid
from unittest.mock import Mock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from accounthub.core.exceptions import AuditError, ValidationError
from accounthub.models.database.application import Application
from accounthub.models.schemas.application import ApplicationCreate
from accounthub.models.schemas.audit_log import AuditLogEntry
from accounthub.services import applications, audit, users
from accounthub.services.audit import AuditContext
from accounthub.tests.utils.factories import create_random_application, create_random_user
from accounthub.tests.utils.utils import random_slug


class TestLogAction:
    def test_writes_entry(self, db, admin):
        entry = AuditLogEntry(
            admin_id=str(admin.id),
            action="CREATE_APPLICATION",
            resource_type="application",
            resource_id=str(uuid.uuid4()),
            details={"slug": "reader"},
            ip_address="127.0.0.1",
        )

        log = audit.log_action(db, entry)

        assert log.id is not None
        assert log.admin_id == admin.id
        assert log.details == {"slug": "reader"}

    def test_rejects_bad_admin_id(self, db):
        entry = AuditLogEntry(admin_id="admin", action="X", resource_type="application")
        with pytest.raises(ValidationError):
            audit.log_action(db, entry)

    def test_rejects_bad_target_user_id(self, db, admin):
        entry = AuditLogEntry(admin_id=str(admin.id), action="BAN_USER", resource_type="user", resource_id="42")
        with pytest.raises(ValidationError):
            audit.log_action(db, entry)

    def test_insert_failure_raises_audit_error(self):
        """Test a failed commit is rolled back and reported as AuditError"""
        session = Mock(spec=Session)
        session.commit.side_effect = SQLAlchemyError("disk full")
        entry = AuditLogEntry(admin_id=str(uuid.uuid4()), action="X", resource_type="application")

        with pytest.raises(AuditError):
            audit.log_action(session, entry)
        session.rollback.assert_called_once()


class TestLogActionSafely:
    def test_failure_is_reported_not_raised(self):
        session = Mock(spec=Session)
        session.commit.side_effect = SQLAlchemyError("disk full")
        entry = AuditLogEntry(admin_id=str(uuid.uuid4()), action="X", resource_type="application")

        with patch.object(audit, "audit_logger") as audit_logger:
            result = audit.log_action_safely(session, entry)

        assert result.ok is False
        assert isinstance(result.error, AuditError)
        audit_logger.error.assert_called_once()

    def test_success(self, db, admin):
        entry = AuditLogEntry(admin_id=str(admin.id), action="X", resource_type="application")
        result = audit.log_action_safely(db, entry)
        assert result.ok is True
        assert result.log_id is not None

    def test_mutation_survives_audit_failure(self, db, actor):
        """Test the entity change is kept when its audit entry cannot be written"""
        app_in = ApplicationCreate(name="Audit Down", slug=random_slug())

        with patch.object(audit, "log_action", side_effect=AuditError("insert failed")):
            app = applications.create_application(db, app_in, actor)

        assert db.get(Application, app.id) is not None
        assert audit.get_logs(db)["count"] == 0


class TestRecord:
    def test_no_actor_writes_nothing(self, db):
        assert audit.record(db, None, "X", "application") is None
        assert audit.record(db, AuditContext(admin_id=None), "X", "application") is None
        assert audit.get_logs(db)["count"] == 0

    def test_actor_details_are_recorded(self, db, actor):
        result = audit.record(db, actor, "DELETE_APPLICATION", "application", uuid.uuid4(), {"slug": "x"})
        assert result.ok
        log = audit.get_recent_logs(db)[0]
        assert log.user_agent == "pytest"
        assert log.ip_address == "127.0.0.1"


class TestQueries:
    def test_get_logs_filters_and_pages(self, db, admin, actor):
        for _ in range(3):
            create_random_application(db)
        for _ in range(3):
            applications.create_application(db, ApplicationCreate(name="Tracked", slug=random_slug()), actor)
        audit.record(db, actor, "DELETE_APPLICATION", "application", uuid.uuid4())

        everything = audit.get_logs(db)
        creates = audit.get_logs(db, action="CREATE_APPLICATION", limit=2)

        assert everything["count"] == 4
        assert creates["count"] == 3
        assert len(creates["data"]) == 2
        assert creates["limit"] == 2
        assert audit.get_logs(db, admin_id=str(admin.id))["count"] == 4
        assert audit.get_logs(db, admin_id=str(uuid.uuid4()))["count"] == 0

    def test_limit_is_clamped(self, db):
        assert audit.get_logs(db, limit=1000)["limit"] == 100
        assert audit.get_logs(db, limit=0, offset=-5)["offset"] == 0

    def test_get_logs_rejects_bad_admin_id(self, db):
        with pytest.raises(ValidationError):
            audit.get_logs(db, admin_id="someone")

    def test_logs_by_target_user(self, db, actor):
        user = create_random_user(db)
        users.toggle_ban(db, str(user.id), True, actor)
        users.toggle_ban(db, str(user.id), False, actor)

        logs = audit.get_logs_by_target_user(db, str(user.id).upper())

        assert sorted(log.action for log in logs) == ["BAN_USER", "UNBAN_USER"]
        assert {log.target_user_email for log in logs} == {user.email}

    def test_logs_by_target_user_rejects_bad_id(self, db):
        with pytest.raises(ValidationError):
            audit.get_logs_by_target_user(db, "nobody")
