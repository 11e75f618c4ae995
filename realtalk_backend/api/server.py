from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from realtalk_backend import __version__, dashboard
from realtalk_backend.auth import AuthError, AuthService, TokenClaims, get_auth_service, get_token_claims
from realtalk_backend.auth.schemas import LoginRequest, RegisterRequest
from realtalk_backend.billing.stripe_billing import create_checkout_session
from realtalk_backend.config import Config, load_config
from realtalk_backend.db import init_db
from realtalk_backend.util.time import utcnow_iso


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


def _cfg(request: Request) -> Config:
    return request.app.state.cfg


# -----------------------------
# Health
# -----------------------------

health_router = APIRouter()


@health_router.get("/health")
def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "timestamp": utcnow_iso(),
        "message": "Realtalk AI Backend is healthy!",
    }


# -----------------------------
# Auth
# -----------------------------

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


@auth_router.post("/register", status_code=201)
def auth_register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)) -> Dict[str, Any]:
    """Create a new user account, optionally with an organization it owns."""
    out = auth.register(
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        organization_name=payload.organization_name,
    )
    return {"message": "registration_successful", "token_type": "bearer", **out}


@auth_router.post("/login")
def auth_login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)) -> Dict[str, Any]:
    out = auth.login(email=payload.email, password=payload.password)
    return {"message": "login_successful", "token_type": "bearer", **out}


@auth_router.get("/me")
def auth_me(
    claims: TokenClaims = Depends(get_token_claims),
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    return auth.current_user(claims)


@auth_router.post("/logout")
def auth_logout(_claims: TokenClaims = Depends(get_token_claims)) -> Dict[str, Any]:
    # Tokens are stateless; the client drops it and it expires on its own.
    return {"message": "logout_successful"}


# -----------------------------
# Billing (Stripe)
# -----------------------------

billing_router = APIRouter(prefix="/api/billing", tags=["billing"])


class CheckoutSessionRequest(BaseModel):
    price_id: str = Field(min_length=1)
    success_url: Optional[str] = None
    cancel_url: Optional[str] = None


@billing_router.post("/create-checkout-session")
def billing_checkout_session(
    payload: CheckoutSessionRequest,
    request: Request,
    claims: TokenClaims = Depends(get_token_claims),
) -> Any:
    """Create a Stripe Checkout session for the logged-in user."""
    cfg = _cfg(request)
    try:
        return create_checkout_session(
            cfg,
            user_id=claims.user_id,
            price_id=payload.price_id,
            success_url=payload.success_url,
            cancel_url=payload.cancel_url,
        )
    except RuntimeError as e:
        # Stripe missing / not configured.
        raise HTTPException(status_code=501, detail=str(e))
    except Exception as e:
        _debug(f"billing error for user_id={claims.user_id}: {type(e).__name__}: {e}")
        content: Dict[str, Any] = {"detail": "billing_error"}
        if cfg.is_development:
            content["message"] = str(e)
        return JSONResponse(status_code=500, content=content)


# -----------------------------
# Dashboard (fixtures)
# -----------------------------

dashboard_router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@dashboard_router.get("/{section}")
def dashboard_section(section: str) -> Any:
    try:
        return dashboard.get_section(section)
    except KeyError:
        raise HTTPException(status_code=404, detail="not_found")


# -----------------------------
# Error handling
# -----------------------------


def _validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        out.append({"field": ".".join(loc) or "body", "message": err.get("msg", "invalid")})
    return out


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": "validation_failed", "errors": _validation_errors(exc)},
        )

    @app.exception_handler(AuthError)
    async def _on_auth_error(request: Request, exc: AuthError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def _on_unhandled(request: Request, exc: Exception) -> JSONResponse:
        _debug(f"unhandled error on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
        content: Dict[str, Any] = {"detail": "internal_error"}
        if _cfg(request).is_development:
            content["message"] = str(exc)
        return JSONResponse(status_code=500, content=content)


# -----------------------------
# App factory
# -----------------------------


def create_app(cfg: Config | None = None) -> FastAPI:
    """Build the API. Everything configurable comes from `cfg`."""
    cfg = cfg or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(cfg.DB_DSN)
        _debug(f"Realtalk backend ready (env={cfg.APP_ENV})")
        yield

    app = FastAPI(title="Realtalk AI Backend", version=__version__, lifespan=lifespan)
    app.state.cfg = cfg
    app.state.auth = AuthService(cfg)

    origins = cfg.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
        )

    _install_error_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(billing_router)
    app.include_router(dashboard_router)

    # Mounted last so API routes take precedence over files.
    static_dir = Path(cfg.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
    else:
        _debug(f"static dir not found, skipping: {static_dir}")

    return app
