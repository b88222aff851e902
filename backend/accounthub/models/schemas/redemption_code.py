import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import model_validator
from sqlmodel import Field, SQLModel

from accounthub.core.config import settings
from accounthub.models.constants import RedemptionCodeStatus, RedemptionCodeType


class RedemptionCodeBase(SQLModel):
    """Fields shared by a single code and a batch template"""
    code_type: RedemptionCodeType = "single"
    application_id: uuid.UUID
    membership_plan_id: uuid.UUID
    max_uses: int = 1
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    is_active: bool = True
    status: RedemptionCodeStatus = "active"
    description: str | None = None
    extra_data: Dict[str, Any] | None = None


class RedemptionCodeCreate(RedemptionCodeBase):
    """Schema for creating one code. The code is generated unless auto_generate is off."""
    code: str | None = Field(default=None, max_length=50)
    auto_generate: bool = True

    @model_validator(mode="after")
    def check_code_present(self) -> "RedemptionCodeCreate":
        if not self.auto_generate and not self.code:
            raise ValueError("code is required when auto_generate is false")
        return self


class RedemptionCodeTemplate(RedemptionCodeBase):
    """Template stamped on every code of a batch"""
    code_type: RedemptionCodeType = "batch"


class RedemptionCodeBatchCreate(SQLModel):
    count: int = Field(ge=1, le=settings.REDEMPTION_BATCH_MAX)
    template: RedemptionCodeTemplate


class RedemptionCodeUpdate(SQLModel):
    """Partial update. Status can be overridden directly."""
    code: str | None = Field(default=None, max_length=50)
    code_type: RedemptionCodeType | None = None
    application_id: uuid.UUID | None = None
    membership_plan_id: uuid.UUID | None = None
    max_uses: int | None = None
    current_uses: int | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    is_active: bool | None = None
    status: RedemptionCodeStatus | None = None
    description: str | None = None
    extra_data: Dict[str, Any] | None = None


class RedemptionCodePublic(SQLModel):
    id: uuid.UUID
    code: str
    code_type: str
    application_id: uuid.UUID
    membership_plan_id: uuid.UUID
    max_uses: int
    current_uses: int
    valid_from: datetime
    valid_until: datetime | None
    is_active: bool
    status: str
    description: str | None
    extra_data: Dict[str, Any] | None
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime


class RedemptionCodeRow(RedemptionCodePublic):
    """List row with joined application and plan display fields"""
    application_name: str | None = None
    application_slug: str | None = None
    plan_code: str | None = None
    plan_display_name: str | None = None
    plan_price: Decimal | None = None
    plan_currency: str | None = None
    plan_duration_days: int | None = None
    usage_display: str = ""


class RedemptionCodeFilters(SQLModel):
    application_id: uuid.UUID | None = None
    status: RedemptionCodeStatus | None = None
    code_type: RedemptionCodeType | None = None
    search: str | None = None


class RedemptionCodeExportFilters(SQLModel):
    application_id: uuid.UUID | None = None
    status: RedemptionCodeStatus | None = None


class RedemptionCodeExportRow(SQLModel):
    id: uuid.UUID
    code: str
    status: str
    application_name: str = "-"
    plan_name: str = "-"
    valid_until: datetime | None = None


class RedemptionCodeStats(SQLModel):
    total: int = 0
    active: int = 0
    expired: int = 0
    exhausted: int = 0


class RedemptionCodeUsePublic(SQLModel):
    id: uuid.UUID
    redemption_code_id: uuid.UUID
    user_id: uuid.UUID
    membership_id: uuid.UUID | None
    redeemed_at: datetime
    ip_address: str | None
    user_agent: str | None
    extra_data: Dict[str, Any] | None
    created_at: datetime
    user_email: Optional[str] = None
    user_full_name: Optional[str] = None
    membership_status: Optional[str] = None
    membership_expires_at: Optional[datetime] = None
