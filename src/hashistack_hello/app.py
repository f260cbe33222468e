"""
FastAPI application for the HashiStack hello service.

Endpoints:
- GET /hello             greeting plus raw Consul and Vault responses
- GET /null-safety-demo  optional-value handling demo
- GET /version           static version payload
"""
import logging
import os
import time
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Query

from hashistack_hello import __version__
from hashistack_hello import null_safety
from hashistack_hello.config import Settings, get_settings
from hashistack_hello.upstream import UpstreamClient, UpstreamError, UpstreamResult

CONSUL_SERVICES_URL = "http://consul:8500/v1/agent/services"
VAULT_SECRET_URL = "http://vault:8200/v1/secret/data/myapp"

HELLO_MESSAGE = "Hello from Spring Boot (simple HashiStack example)"
DEMO_MESSAGE = "Null safety example - Spring Boot 4.0.0 with Java 25"
VERSION_INFO = {
    "spring_boot_version": "4.0.0",
    "java_version": "25",
    "message": "Running with enhanced null safety features",
}

logging.basicConfig(
    level=logging.DEBUG if get_settings().DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@lru_cache
def get_upstream_client() -> UpstreamClient:
    """Shared client for Consul and Vault calls."""
    return UpstreamClient(timeout=get_settings().UPSTREAM_TIMEOUT_SECONDS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "Starting HashiStack hello service (upstream timeout %.1fs)",
        settings.UPSTREAM_TIMEOUT_SECONDS,
    )
    yield


app = FastAPI(title="HashiStack Hello API", version=__version__, lifespan=lifespan)


def _put_result(out: dict[str, Any], prefix: str, raw_key: str, result: UpstreamResult) -> None:
    if isinstance(result, UpstreamError):
        out[f"{prefix}_error"] = result.message
    else:
        out[raw_key] = result.body


@app.get("/hello")
def hello(
    settings: Settings = Depends(get_settings),
    client: UpstreamClient = Depends(get_upstream_client),
):
    """Greeting plus best-effort Consul and Vault lookups; always 200."""
    out: dict[str, Any] = {"message": HELLO_MESSAGE}

    # Demo only: real services must never echo credentials.
    out["db_user"] = os.environ.get("DB_USER", "(not set)")
    out["db_pass_present"] = "DB_PASS" in os.environ

    _put_result(out, "consul", "consul_services_raw", client.get(CONSUL_SERVICES_URL))
    _put_result(
        out,
        "vault",
        "vault_secret_raw",
        client.get(VAULT_SECRET_URL, headers={"X-Vault-Token": settings.VAULT_TOKEN}),
    )
    return out


@app.get("/null-safety-demo")
async def null_safety_demo(
    first_name: str | None = Query(default=None, alias="firstName"),
    last_name: str | None = Query(default=None, alias="lastName"),
    email: str | None = Query(default=None),
):
    """Show how missing and blank query values fall back to defaults."""
    name = null_safety.display_name(first_name, last_name)
    found = null_safety.safe_find(email)

    user_info = null_safety.UserInfo(
        id=f"user-{time.monotonic_ns()}",
        name=name,
        email=email,
        phone=None,
    )
    return {
        "display_name": name,
        "email_found": found is not None,
        "email_value": found if found is not None else "Not found",
        "email_length": null_safety.length(email),
        "user_info": {
            "id": user_info.id,
            "name": user_info.name,
            "contact": user_info.contact_info,
        },
        "message": DEMO_MESSAGE,
    }


@app.get("/version")
async def version():
    """Static version payload."""
    return dict(VERSION_INFO)
