"""Cart reminder property derivation.

Turns a cart snapshot into the four properties the notification platform
uses to render a cart reminder. An empty cart yields four None values,
which the platform reads as "clear the reminder".
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence
from urllib.parse import quote, urlsplit

from storefront_signals.config import ReminderOptions
from storefront_signals.i18n import DEFAULT_REMINDER_MESSAGE
from storefront_signals.schemas.cart import Cart, CartLine

DESTINATION_PATHS = {
    "cart": "/cart",
    "homepage": "/",
    "checkout": "/checkout",
}

UTM_CONTENT_PRODUCT_NAME = "product-name"


@dataclass(frozen=True)
class ReminderProperties:
    """Properties describing the cart reminder to show."""

    product_name: Optional[str] = None
    message: Optional[str] = None
    url: Optional[str] = None
    picture_url: Optional[str] = None

    @classmethod
    def empty(cls) -> "ReminderProperties":
        return cls()

    @property
    def is_empty(self) -> bool:
        return (
            self.product_name is None
            and self.message is None
            and self.url is None
            and self.picture_url is None
        )

    def as_properties(self) -> Dict[str, Any]:
        """Flatten to the platform's property names."""
        return {
            "string_cartReminderProductName": self.product_name,
            "string_cartReminderMessage": self.message,
            "string_cartReminderUrl": self.url,
            "string_cartReminderPictureUrl": self.picture_url,
        }


def _encode(value: str) -> str:
    # Same escaping as a browser's encodeURIComponent
    return quote(value, safe="!*'()")


def select_cart_line(lines: Sequence[CartLine], strategy: str = "latest") -> CartLine:
    """Pick the line the reminder is about.

    "latest" relies on the platform listing the newest line first. On
    price ties the line scanned last wins.

    Args:
        lines: Non-empty cart lines
        strategy: "latest", "most-expensive", or "least-expensive"

    Returns:
        Selected cart line
    """
    if strategy == "most-expensive":
        selected = lines[0]
        for line in lines:
            if line.final_line_price >= selected.final_line_price:
                selected = line
        return selected

    if strategy == "least-expensive":
        selected = lines[0]
        for line in lines:
            if line.final_line_price <= selected.final_line_price:
                selected = line
        return selected

    return lines[0]


def destination_url(line: CartLine, destination: str = "cart", origin: str = "") -> str:
    """Resolve where a reminder click takes the shopper."""
    if destination == "product":
        path = line.url
    else:
        path = DESTINATION_PATHS.get(destination, DESTINATION_PATHS["cart"])

    if path.startswith("/"):
        return origin.rstrip("/") + path
    return path


def append_utm_parameters(url: str, options: ReminderOptions, line: CartLine) -> str:
    """Append the configured UTM parameters to ``url``.

    Empty UTM fields are skipped; the URL is returned unchanged when no
    parameter is configured.
    """
    params: List[str] = []
    for key, value in (
        ("utm_source", options.utm_source),
        ("utm_medium", options.utm_medium),
        ("utm_campaign", options.utm_campaign),
    ):
        if value:
            params.append(f"{key}={_encode(value)}")

    if options.utm_content == UTM_CONTENT_PRODUCT_NAME:
        params.append(f"utm_content={_encode(line.product_title)}")

    if not params:
        return url

    separator = "&" if "?" in url else "?"
    return url + separator + "&".join(params)


def apply_discount_code(url: str, discount_code: str) -> str:
    """Rewrite ``url`` into a discount redemption URL.

    The redirect target carries the path only; the original query string
    is appended after the redirect parameter.

    "/cart?utm_source=x" + "SAVE10"
        -> "/discount/SAVE10?redirect=%2Fcart&utm_source=x"
    """
    parts = urlsplit(url)
    origin = f"{parts.scheme}://{parts.netloc}" if parts.netloc else ""

    rewritten = f"{origin}/discount/{_encode(discount_code)}?redirect={_encode(parts.path or '/')}"
    if parts.query:
        rewritten += "&" + parts.query
    return rewritten


def build_reminder_url(line: CartLine, options: ReminderOptions, origin: str = "") -> str:
    url = destination_url(line, options.destination, origin)
    url = append_utm_parameters(url, options, line)
    if options.discount_code:
        url = apply_discount_code(url, options.discount_code)
    return url


def derive_reminder_properties(
    cart: Cart,
    options: ReminderOptions,
    translate: Callable[[str], str],
    origin: str = "",
) -> ReminderProperties:
    """Derive the cart reminder properties from a cart snapshot.

    Args:
        cart: Current cart
        options: Reminder options
        translate: Localizes the default message
        origin: Shop origin prefixed to site-relative URLs

    Returns:
        ReminderProperties, all None for an empty cart
    """
    if cart.is_empty:
        return ReminderProperties.empty()

    line = select_cart_line(cart.items, options.strategy)

    return ReminderProperties(
        product_name=line.product_title,
        message=options.message or translate(DEFAULT_REMINDER_MESSAGE),
        url=build_reminder_url(line, options, origin),
        picture_url=None if options.disable_image else line.image,
    )
