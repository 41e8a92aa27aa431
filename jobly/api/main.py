from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobly.api.endpoints import health
from jobly.api.endpoints.auth import router as auth_router
from jobly.api.endpoints.companies import router as companies_router
from jobly.api.endpoints.jobs import router as jobs_router
from jobly.api.endpoints.users import router as users_router
from jobly.api.middleware.auth import AuthMiddleware
from jobly.api.middleware.error_shaping import SafeErrorMiddleware, install_error_handlers
from jobly.api.middleware.request_context import RequestContextMiddleware
from jobly.core.config import load_config, log_config
from jobly.core.storage.database import get_database
from jobly.core.storage.schema import create_schema


@asynccontextmanager
async def lifespan(_app: FastAPI):
    cfg = load_config()
    log_config(cfg)
    db = get_database()
    if db.dialect.name == "sqlite":
        # local dev convenience; postgres schemas are managed outside the app
        create_schema(db)
    yield


app = FastAPI(
    title="Jobly API",
    version="0.1.0",
    lifespan=lifespan,
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call is the OUTERMOST wrapper.
# Runtime order (outermost -> innermost):
#   SafeErrorMiddleware -> CORSMiddleware -> RequestContext -> Auth -> handler
# ------------------------------------------------------------

app.add_middleware(AuthMiddleware, enabled=load_config().auth_enabled)

app.add_middleware(RequestContextMiddleware)

_cors_origins_raw = os.getenv("JOBLY_CORS_ORIGINS", "").strip()
_cors_origins = [o.strip() for o in _cors_origins_raw.split(",") if o.strip()] if _cors_origins_raw else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(SafeErrorMiddleware)

install_error_handlers(app)

app.include_router(health.router)
app.include_router(auth_router)
app.include_router(companies_router)
app.include_router(jobs_router)
app.include_router(users_router)

