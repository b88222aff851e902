from .admin import Admin
from .application import Application
from .user import User
from .app_version import AppVersion
from .membership_plan import MembershipPlan
from .membership import UserAppMembership
from .payment_config import PaymentConfig
from .payment import PaymentHistory
from .redemption_code import RedemptionCode, RedemptionCodeUse
from .audit_log import AdminAuditLog
from .app_config import AppConfig, AppConfigTemplate

__all__ = [
    "Admin",
    "Application",
    "User",
    "AppVersion",
    "MembershipPlan",
    "UserAppMembership",
    "PaymentConfig",
    "PaymentHistory",
    "RedemptionCode",
    "RedemptionCodeUse",
    "AdminAuditLog",
    "AppConfig",
    "AppConfigTemplate",
]
