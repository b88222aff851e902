import uuid
from datetime import datetime
from typing import Any, Dict, List

from sqlmodel import Field, SQLModel

from accounthub.models.constants import AppConfigType, TemplateFieldType


class AppConfigBase(SQLModel):
    config_key: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    config_data: Dict[str, Any] = Field(default_factory=dict)
    config_type: AppConfigType | None = None
    is_active: bool = True


class AppConfigCreate(AppConfigBase):
    pass


class AppConfigUpdate(SQLModel):
    config_key: str | None = Field(default=None, min_length=1, max_length=255)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    config_data: Dict[str, Any] | None = None
    config_type: AppConfigType | None = None
    is_active: bool | None = None


class AppConfigPublic(AppConfigBase):
    id: uuid.UUID
    config_type: str | None
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime


class AppConfigActive(SQLModel):
    is_active: bool


class AppConfigFilters(SQLModel):
    config_type: AppConfigType | None = None
    is_active: bool | None = None
    search: str | None = None


class TemplateField(SQLModel):
    key: str
    label: str
    type: TemplateFieldType
    required: bool = False
    placeholder: str | None = None
    options: List[str] | None = None


class AppConfigTemplateBase(SQLModel):
    template_name: str = Field(min_length=1, max_length=100)
    display_name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    template_fields: List[TemplateField] = Field(default_factory=list)
    example_data: Dict[str, Any] | None = None
    icon: str | None = None
    category: str | None = None
    is_active: bool = True
    sort_order: int = 0


class AppConfigTemplateCreate(AppConfigTemplateBase):
    pass


class AppConfigTemplateUpdate(SQLModel):
    template_name: str | None = Field(default=None, min_length=1, max_length=100)
    display_name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    template_fields: List[TemplateField] | None = None
    example_data: Dict[str, Any] | None = None
    icon: str | None = None
    category: str | None = None
    is_active: bool | None = None
    sort_order: int | None = None


class AppConfigTemplatePublic(AppConfigTemplateBase):
    id: uuid.UUID
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime
