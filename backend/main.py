import logging
import sys
from pathlib import Path
from typing import Optional

import psycopg2
from dotenv import load_dotenv
from fastapi import FastAPI, Header, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel

_project_root = Path(__file__).resolve().parents[1]
if str(_project_root) not in sys.path:
    sys.path.append(str(_project_root))

try:
    from backend import app_context
    from backend.app.entitlements import UserNotFoundError
    from backend.app.feature_gates import FeatureGateError
    from backend.app.routes.premium import router as premium_router
    from backend.config import AppConfig, load_app_config
except ModuleNotFoundError as exc:
    if exc.name != "backend":
        raise
    import app_context  # type: ignore[no-redef]
    from app.entitlements import UserNotFoundError  # type: ignore[no-redef]
    from app.feature_gates import FeatureGateError  # type: ignore[no-redef]
    from app.routes.premium import router as premium_router  # type: ignore[no-redef]
    from config import AppConfig, load_app_config  # type: ignore[no-redef]


load_dotenv()

CONFIG: AppConfig = load_app_config()

logging.basicConfig(
    level=CONFIG.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("premium.api")


class CurrentUser(BaseModel):
    id: int
    email: Optional[str] = None


def get_conn():
    return psycopg2.connect(**CONFIG.database.connect_kwargs())


def _extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, CONFIG.jwt_secret_key, algorithms=[CONFIG.jwt_algorithm])


def get_current_user(authorization: Optional[str] = Header(None)) -> CurrentUser:
    token = _extract_bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication token required",
        )
    try:
        claims = decode_access_token(token)
    except ExpiredSignatureError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
        ) from exc
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        ) from exc

    user_id = claims.get("userId", claims.get("sub"))
    try:
        return CurrentUser(id=int(user_id), email=claims.get("email"))
    except (TypeError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        ) from exc


app = FastAPI(title="Tia Market Premium API")

if CONFIG.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(CONFIG.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(FeatureGateError)
async def feature_gate_error_handler(_request: Request, exc: FeatureGateError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": dict(exc.payload)})


@app.exception_handler(UserNotFoundError)
async def user_not_found_handler(_request: Request, exc: UserNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.get("/api/health")
def health():
    return {"status": "ok"}


app_context.configure(get_conn=get_conn, get_current_user=get_current_user)

app.include_router(premium_router)
