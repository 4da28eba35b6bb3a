"""Configuration management for shop-smoke."""

from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file at import time
load_dotenv()


class TimeoutConfig(BaseModel):
    """Wait budgets, all in milliseconds."""
    
    navigation_ms: int = Field(default=30000, gt=0)
    selector_ms: int = Field(default=5000, gt=0)
    cart_wait_ms: int = Field(default=5000, gt=0)
    poll_interval_ms: int = Field(default=100, gt=0)
    probe_ms: int = Field(default=1000, gt=0)
    settle_ms: int = Field(default=500, ge=0)


class MockCartConfig(BaseModel):
    """Cart API mocking configuration."""
    
    enabled: bool = False
    log_requests: bool = True
    currency: str = "USD"
    unit_price: int = Field(default=1200, ge=0)  # minor currency units
    grams: int = Field(default=100, ge=0)


class BrowserConfig(BaseModel):
    """Browser launch configuration."""
    
    name: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    viewport_width: int = Field(default=1920, ge=0)
    viewport_height: int = Field(default=1080, ge=0)
    slow_mo_ms: int = Field(default=0, ge=0)


class Config(BaseSettings):
    """Main configuration for shop-smoke."""
    
    model_config = SettingsConfigDict(
        env_prefix="SHOP_SMOKE_",
        env_nested_delimiter="__",
    )
    
    # Core settings
    store_url: str = "https://prometheamosaic.com"
    collection_handle: str = "bookmarks"
    brand_name: str = "Promethea Mosaic"
    artifacts_dir: Path = Path("test-results")
    log_level: str = "INFO"
    
    # Sub-configurations
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    mock_cart: MockCartConfig = Field(default_factory=MockCartConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    
    @field_validator("store_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
    
    def url(self, path: str = "") -> str:
        """Build an absolute storefront URL for a path like '/cart.js'."""
        if not path:
            return self.store_url
        return f"{self.store_url}/{path.lstrip('/')}"


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from YAML file and environment variables."""
    config_data: dict = {}
    
    # Try to find config file
    if config_path is None:
        for name in ["shop_smoke.yaml", "shop_smoke.yml", ".shop_smoke.yaml"]:
            if Path(name).exists():
                config_path = Path(name)
                break
    
    # Load from YAML if exists
    if config_path and config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if raw and "shop_smoke" in raw:
                config_data = raw["shop_smoke"]
            elif raw:
                config_data = raw
    
    # Environment variables override YAML
    return _with_env_overrides(config_data)


def _with_env_overrides(config_data: dict) -> Config:
    """Build a Config where environment variables win over file values."""
    # Init kwargs beat env in BaseSettings, so fold the env values in first.
    env_data = Config().model_dump(exclude_unset=True)
    return Config(**_deep_merge(config_data, env_data))


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
