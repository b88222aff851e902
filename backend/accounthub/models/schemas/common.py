from typing import Generic, List, TypeVar

from pydantic import BaseModel
from sqlmodel import SQLModel

T = TypeVar("T")


class Message(SQLModel):
    message: str


class Page(BaseModel, Generic[T]):
    """One page of a list view plus the total row count"""
    data: List[T]
    total: int
    page: int
    page_size: int


class MutationResponse(BaseModel, Generic[T]):
    """Result of a create/update/delete plus the notification to show"""
    message: str
    data: T | None = None
