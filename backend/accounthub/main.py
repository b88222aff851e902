from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.middleware.cors import CORSMiddleware

from accounthub.api.deps import status_for
from accounthub.api.main import api_router
from accounthub.core.config import settings
from accounthub.core.exceptions import AccountHubError
from accounthub.core.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, get_language_from_request
from accounthub.core.logging import configure_logging
from accounthub.queries.base import QueryCache, failure_notification
from accounthub.services import auth


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one request cache per running app, dropped on sign-out and on shutdown
    cache = QueryCache()
    events = auth.AuthEvents()
    app.state.query_cache = cache
    app.state.auth_events = events
    unsubscribe = events.on_auth_state_change(cache.handle_auth_event)
    try:
        yield
    finally:
        unsubscribe()
        cache.clear()


configure_logging()

if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(dsn=str(settings.SENTRY_DSN), enable_tracing=True)

# Disable Swagger UI and documentation in production
if not settings.docs_enabled:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )
else:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

# Set all CORS enabled origins
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(AccountHubError)
async def accounthub_error_handler(request: Request, exc: AccountHubError) -> JSONResponse:
    language = get_language_from_request(request)
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": failure_notification(exc, "fetch", language)},
    )


# Custom OpenAPI schema to include the Accept-Language header parameter
def custom_openapi():
    if not settings.docs_enabled:
        return {}

    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description="AccountHub admin API",
        routes=app.routes,
    )

    language_description = (
        f"Preferred language for notifications. "
        f"Supported: {', '.join(sorted(SUPPORTED_LANGUAGES))}. "
        f"Default: {DEFAULT_LANGUAGE}."
    )

    openapi_schema["components"] = openapi_schema.get("components", {})
    openapi_schema["components"]["parameters"] = openapi_schema["components"].get("parameters", {})
    openapi_schema["components"]["parameters"]["Accept-Language"] = {
        "name": "Accept-Language",
        "in": "header",
        "required": False,
        "schema": {
            "title": "Accept-Language",
            "type": "string",
            "default": DEFAULT_LANGUAGE,
            "enum": sorted(SUPPORTED_LANGUAGES),
        },
        "description": language_description,
    }

    for path in openapi_schema.get("paths", {}).values():
        for operation in path.values():
            operation.setdefault("parameters", []).append(
                {"$ref": "#/components/parameters/Accept-Language"}
            )

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

app.include_router(api_router, prefix=settings.API_V1_STR)
