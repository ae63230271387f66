"""Runtime configuration for the checkout service.

Values come from the environment. The store location and the deployment
region are required: a missing value stops startup rather than falling
back to a default.
"""

import os
from dataclasses import dataclass

from protean.exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _required(environ, name: str) -> str:
    value = (environ.get(name) or "").strip()
    if not value:
        raise ConfigurationError(f"Missing required environment variable: {name}")
    return value


@dataclass(frozen=True)
class Settings:
    store_url: str
    region: str
    orders_table: str = "orders"
    log_level: str = "INFO"
    log_json: bool = True

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        return cls(
            store_url=_required(environ, "ORDERS_STORE_URL"),
            region=_required(environ, "DEPLOYMENT_REGION"),
            orders_table=(environ.get("ORDERS_TABLE") or "orders").strip(),
            log_level=(environ.get("LOG_LEVEL") or "INFO").strip().upper(),
            log_json=(environ.get("LOG_JSON") or "true").strip().lower() in _TRUE_VALUES,
        )
