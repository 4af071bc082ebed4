"""
Payments configuration loader (YAML file + environment variables).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Literal, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from trackmypark.error_handler import ConfigurationError

logger = logging.getLogger(__name__)

_REAL_MODES = {"real", "live"}
_MOCK_MODES = {"mock", "test"}


class ProductConfig(BaseModel):
    name: str
    price: int = Field(gt=0)  # minor units
    hours: int = Field(gt=0)


class PaymentsConfig(BaseModel):
    currency: str = "INR"
    minimum_order_amount: float = Field(default=50, gt=0)
    allowed_origins: List[str] = Field(default_factory=list)
    products: Dict[str, ProductConfig] = Field(default_factory=dict)


class PaymentsSettings(BaseModel):
    environment: str = "production"
    integrations_mode: Literal["real", "mock"] = "real"
    port: int = Field(default=3002, ge=1, le=65535)
    frontend_url: str = "http://localhost:5173"
    razorpay_key_id: str = ""
    razorpay_secret: str = ""
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    extra_origins: List[str] = Field(default_factory=list)
    payments: PaymentsConfig = Field(default_factory=PaymentsConfig)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def allowed_origins(self) -> List[str]:
        origins: List[str] = []
        for origin in [*self.payments.allowed_origins, self.frontend_url, *self.extra_origins]:
            origin = (origin or "").strip().rstrip("/")
            if origin and origin not in origins:
                origins.append(origin)
        return origins

    def missing_credentials(self) -> List[str]:
        # Signing secrets are needed even against mocks; signature checks are local.
        required = {
            "RAZORPAY_SECRET": self.razorpay_secret,
            "STRIPE_WEBHOOK_SECRET": self.stripe_webhook_secret,
        }
        if self.integrations_mode == "real":
            required["RAZORPAY_KEY_ID"] = self.razorpay_key_id
            required["STRIPE_SECRET_KEY"] = self.stripe_secret_key
        return sorted(name for name, value in required.items() if not value)

    def validate_credentials(self) -> None:
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")


def mask_key(value: Optional[str]) -> str:
    """Show only the first 10 characters of a key id in logs and responses."""
    return f"{value[:10]}..." if value else "NOT SET"


def load_payments_config(config_path: Optional[Path] = None) -> PaymentsConfig:
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config" / "payments_config.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Payments config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error("Payments config is not valid YAML: %s", e)
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Payments config {config_path} must be a mapping")

    try:
        cfg = PaymentsConfig(**data)
        logger.info("Loaded payments config from %s (%d products)", config_path, len(cfg.products))
        return cfg
    except ValidationError as e:
        logger.error("Payments config validation failed: %s", e)
        raise


def load_settings(env: Optional[Mapping[str, str]] = None, config_path: Optional[Path] = None) -> PaymentsSettings:
    """
    Build settings from environment variables and the YAML config file.

    Args:
        env: Mapping to read variables from. Defaults to ``os.environ`` after
            loading ``.env``.
        config_path: YAML file path. Defaults to ``PAYMENTS_CONFIG_PATH`` or
            config/payments_config.yml

    Raises:
        ConfigurationError: If a variable has an invalid value
    """
    if env is None:
        load_dotenv()
        env = os.environ

    if config_path is None and env.get("PAYMENTS_CONFIG_PATH"):
        config_path = Path(env["PAYMENTS_CONFIG_PATH"])

    mode = env.get("INTEGRATIONS_MODE", "").strip().lower() or "real"
    if mode in _REAL_MODES:
        mode = "real"
    elif mode in _MOCK_MODES:
        mode = "mock"
    else:
        raise ConfigurationError(f"Unsupported INTEGRATIONS_MODE '{mode}'. Expected 'real' or 'mock'.")

    environment = (env.get("ENVIRONMENT") or env.get("NODE_ENV") or "production").strip().lower()
    extra_origins = [o.strip() for o in env.get("ALLOWED_ORIGINS", "").split(",") if o.strip()]

    try:
        return PaymentsSettings(
            environment=environment,
            integrations_mode=mode,
            port=env.get("PORT") or 3002,
            frontend_url=env.get("FRONTEND_URL") or "http://localhost:5173",
            razorpay_key_id=env.get("RAZORPAY_KEY_ID", "").strip(),
            razorpay_secret=env.get("RAZORPAY_SECRET", "").strip(),
            stripe_secret_key=env.get("STRIPE_SECRET_KEY", "").strip(),
            stripe_webhook_secret=env.get("STRIPE_WEBHOOK_SECRET", "").strip(),
            extra_origins=extra_origins,
            payments=load_payments_config(config_path),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
