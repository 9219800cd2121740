"""Plugin configuration via Pydantic Settings and plugin option models."""

from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """Global runtime settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Cart reminder polling
    POLL_INTERVAL_MS: int = 3000
    UNSUBSCRIBED_POLL_MULTIPLIER: int = 10  # 1 cycle in N while unsubscribed

    # Exit intent
    EXIT_EVENT_COOLDOWN_SECONDS: float = 5 * 60

    # Product normalization
    SANITIZED_TEXT_MAX_LENGTH: int = 120

    # HTTP
    HTTP_TIMEOUT_SECONDS: Optional[float] = None  # None = no timeout
    HTTP_MAX_ATTEMPTS: int = 2

    # Locale used by the built-in translator, e.g. "fr-FR"
    LOCALE: str = ""

    DEBUG: bool = False


settings = Settings()


STRATEGIES = ("latest", "most-expensive", "least-expensive")
DESTINATIONS = ("product", "cart", "homepage", "checkout")


class ReminderOptions(BaseModel):
    """Cart reminder options as passed by the host on plugin registration.

    Accepts the camelCase option names used by the storefront snippet
    (``cartReminderStrategy``...) as well as the snake_case field names.
    Unknown strategy and destination values fall back to their defaults.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    disable_cart_reminder: bool = Field(False, alias="disableCartReminder")
    strategy: str = Field("latest", alias="cartReminderStrategy")
    destination: str = Field("cart", alias="cartReminderDestination")
    message: Optional[str] = Field(None, alias="cartReminderMessage")
    disable_image: bool = Field(False, alias="cartReminderDisableImage")
    discount_code: Optional[str] = Field(None, alias="cartReminderDiscountCode")
    utm_source: Optional[str] = Field(None, alias="cartReminderUtmSource")
    utm_medium: Optional[str] = Field(None, alias="cartReminderUtmMedium")
    utm_campaign: Optional[str] = Field(None, alias="cartReminderUtmCampaign")
    utm_content: Optional[str] = Field(None, alias="cartReminderUtmContent")

    @field_validator("strategy", mode="before")
    @classmethod
    def default_unknown_strategy(cls, value):
        if value is None:
            return "latest"
        if value not in STRATEGIES:
            logger.warning("unknown_reminder_strategy", strategy=value, fallback="latest")
            return "latest"
        return value

    @field_validator("destination", mode="before")
    @classmethod
    def default_unknown_destination(cls, value):
        if value is None:
            return "cart"
        if value not in DESTINATIONS:
            logger.warning("unknown_reminder_destination", destination=value, fallback="cart")
            return "cart"
        return value

    @field_validator("disable_cart_reminder", "disable_image", mode="before")
    @classmethod
    def none_is_false(cls, value):
        return False if value is None else value
