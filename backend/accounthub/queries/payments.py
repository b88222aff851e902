"""Hooks for payment history and payment provider configs."""
from typing import Optional

from sqlmodel import Session

from accounthub.core.i18n import DEFAULT_LANGUAGE
from accounthub.models.schemas.payment import PaymentCreate, PaymentFilters, PaymentUpdate
from accounthub.models.schemas.payment_config import (
    PaymentConfigCreate,
    PaymentConfigFilters,
    PaymentConfigUpdate,
)
from accounthub.queries.base import MutationResult, QueryCache, QueryResult, filters_key, use_mutation, use_query
from accounthub.services import payment_configs, payments
from accounthub.services.audit import AuditContext

ENTITY = "payments"
CONFIG_ENTITY = "payment_configs"
INVALIDATES = [(ENTITY,), ("dashboard",)]
CONFIG_INVALIDATES = [(CONFIG_ENTITY,)]


def use_payments(
    cache: QueryCache,
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[PaymentFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (ENTITY, "list", page, page_size, filters_key(filters)),
        lambda: payments.get_payments(session, page, page_size, filters),
    )


def use_payment(cache: QueryCache, session: Session, payment_id: str) -> QueryResult:
    return use_query(cache, (ENTITY, "detail", payment_id), lambda: payments.get_payment(session, payment_id))


def use_create_payment(
    cache: QueryCache,
    session: Session,
    payment_in: PaymentCreate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: payments.create_payment(session, payment_in, actor),
        INVALIDATES, "created", "create", "payment", language,
    )


def use_update_payment(
    cache: QueryCache,
    session: Session,
    payment_id: str,
    updates: PaymentUpdate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: payments.update_payment(session, payment_id, updates, actor),
        INVALIDATES, "updated", "update", "payment", language,
    )


def use_delete_payment(
    cache: QueryCache,
    session: Session,
    payment_id: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: payments.delete_payment(session, payment_id, actor),
        INVALIDATES, "deleted", "delete", "payment", language,
    )


def use_payment_configs(
    cache: QueryCache,
    session: Session,
    page: int = 1,
    page_size: int = 10,
    filters: Optional[PaymentConfigFilters] = None,
) -> QueryResult:
    return use_query(
        cache,
        (CONFIG_ENTITY, "list", page, page_size, filters_key(filters)),
        lambda: payment_configs.get_payment_configs(session, page, page_size, filters),
    )


def use_payment_config(cache: QueryCache, session: Session, config_id: str) -> QueryResult:
    return use_query(
        cache, (CONFIG_ENTITY, "detail", config_id), lambda: payment_configs.get_payment_config(session, config_id)
    )


def use_create_payment_config(
    cache: QueryCache,
    session: Session,
    config_in: PaymentConfigCreate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: payment_configs.create_payment_config(session, config_in, actor),
        CONFIG_INVALIDATES, "created", "create", "payment_config", language,
    )


def use_update_payment_config(
    cache: QueryCache,
    session: Session,
    config_id: str,
    updates: PaymentConfigUpdate,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: payment_configs.update_payment_config(session, config_id, updates, actor),
        CONFIG_INVALIDATES, "updated", "update", "payment_config", language,
    )


def use_delete_payment_config(
    cache: QueryCache,
    session: Session,
    config_id: str,
    actor: Optional[AuditContext] = None,
    language: str = DEFAULT_LANGUAGE,
) -> MutationResult:
    return use_mutation(
        cache, lambda: payment_configs.delete_payment_config(session, config_id, actor),
        CONFIG_INVALIDATES, "deleted", "delete", "payment_config", language,
    )
