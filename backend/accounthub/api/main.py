from fastapi import APIRouter

from accounthub.api.routes import (
    app_configs,
    app_versions,
    applications,
    auth,
    dashboard,
    membership_plans,
    memberships,
    payment_configs,
    payments,
    redemption_codes,
    users,
)

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(applications.router, prefix="/applications", tags=["applications"])
api_router.include_router(app_versions.router, prefix="/app-versions", tags=["app-versions"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(memberships.router, prefix="/memberships", tags=["memberships"])
api_router.include_router(membership_plans.router, prefix="/membership-plans", tags=["membership-plans"])
api_router.include_router(payment_configs.router, prefix="/payment-configs", tags=["payment-configs"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(redemption_codes.router, prefix="/redemption-codes", tags=["redemption-codes"])
api_router.include_router(dashboard.audit_router, prefix="/audit-logs", tags=["audit-logs"])
api_router.include_router(app_configs.router, prefix="/app-configs", tags=["app-configs"])
api_router.include_router(app_configs.templates_router, prefix="/app-config-templates", tags=["app-config-templates"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
