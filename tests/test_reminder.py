"""Tests for cart reminder property derivation and reminder options."""

import pytest

from storefront_signals.config import ReminderOptions
from storefront_signals.i18n import DEFAULT_REMINDER_MESSAGE, make_translator, translate
from storefront_signals.reminder.properties import (
    ReminderProperties,
    apply_discount_code,
    derive_reminder_properties,
    select_cart_line,
)
from storefront_signals.schemas.cart import Cart

from conftest import make_line


def identity(text: str) -> str:
    return text


def derive(cart: Cart, origin: str = "", **options) -> ReminderProperties:
    return derive_reminder_properties(cart, ReminderOptions(**options), identity, origin=origin)


class TestSelectCartLine:
    """Tests for cart line selection strategies."""

    def test_latest_is_first_line(self, cart):
        assert select_cart_line(cart.items, "latest").product_title == "Linen Shirt"

    def test_most_expensive_tie_goes_to_later_line(self):
        lines = [make_line("A", 500), make_line("B", 1500), make_line("C", 1500)]

        assert select_cart_line(lines, "most-expensive").product_title == "C"

    def test_least_expensive_tie_goes_to_later_line(self):
        lines = [make_line("A", 200), make_line("B", 200), make_line("C", 900)]

        assert select_cart_line(lines, "least-expensive").product_title == "B"

    def test_single_line(self):
        lines = [make_line("Only", 700)]

        for strategy in ("latest", "most-expensive", "least-expensive"):
            assert select_cart_line(lines, strategy).product_title == "Only"


class TestDeriveReminderProperties:
    """Tests for derive_reminder_properties."""

    @pytest.mark.parametrize(
        "options",
        [
            {},
            {"strategy": "most-expensive", "destination": "product"},
            {"message": "Hurry!", "discount_code": "SAVE10", "utm_source": "push"},
            {"disable_image": True, "utm_content": "product-name"},
        ],
    )
    def test_empty_cart_clears_reminder(self, options):
        properties = derive(Cart(), **options)

        assert properties == ReminderProperties()
        assert properties.is_empty
        assert properties.as_properties() == {
            "string_cartReminderProductName": None,
            "string_cartReminderMessage": None,
            "string_cartReminderUrl": None,
            "string_cartReminderPictureUrl": None,
        }

    @pytest.mark.parametrize(
        "options",
        [
            {},
            {"disable_image": True},
            {"strategy": "least-expensive", "destination": "homepage"},
        ],
    )
    def test_non_empty_cart_never_clears(self, cart, options):
        assert not derive(cart, **options).is_empty

    def test_defaults(self, cart):
        properties = derive(cart, origin="https://shop.example.com")

        assert properties == ReminderProperties(
            product_name="Linen Shirt",
            message=DEFAULT_REMINDER_MESSAGE,
            url="https://shop.example.com/cart",
            picture_url="https://cdn.example.com/linen-shirt.jpg",
        )

    def test_most_expensive_line(self, cart):
        properties = derive(cart, strategy="most-expensive", destination="product")

        assert properties.product_name == "Wool Scarf"
        assert properties.url == "/products/wool-scarf?variant=1"

    @pytest.mark.parametrize(
        "destination,expected",
        [
            ("product", "https://shop.example.com/products/linen-shirt?variant=1"),
            ("cart", "https://shop.example.com/cart"),
            ("homepage", "https://shop.example.com/"),
            ("checkout", "https://shop.example.com/checkout"),
        ],
    )
    def test_destinations(self, cart, destination, expected):
        properties = derive(cart, origin="https://shop.example.com", destination=destination)

        assert properties.url == expected

    def test_configured_message(self, cart):
        assert derive(cart, message="Still thinking?").message == "Still thinking?"

    def test_default_message_is_translated(self, cart):
        properties = derive_reminder_properties(cart, ReminderOptions(), make_translator("de-DE"))

        assert properties.message == "Bestellen, bevor es zu spät ist!"

    def test_disable_image(self, cart):
        assert derive(cart, disable_image=True).picture_url is None

    def test_line_without_image(self):
        cart = Cart(items=[make_line("Gift Card", 5000, image=None)])

        assert derive(cart).picture_url is None


class TestReminderUrl:
    """Tests for UTM parameters and discount code rewriting."""

    def test_utm_parameters(self, cart):
        properties = derive(
            cart, utm_source="push", utm_medium="web", utm_campaign="cart reminder"
        )

        assert properties.url == "/cart?utm_source=push&utm_medium=web&utm_campaign=cart%20reminder"

    def test_empty_utm_fields_are_skipped(self, cart):
        assert derive(cart, utm_source="", utm_medium=None).url == "/cart"

    def test_utm_content_product_name(self, cart):
        properties = derive(cart, destination="product", utm_content="product-name")

        assert properties.url == "/products/linen-shirt?variant=1&utm_content=Linen%20Shirt"

    def test_discount_code_keeps_query_after_redirect(self):
        assert apply_discount_code("/cart?utm_source=x", "SAVE10") == (
            "/discount/SAVE10?redirect=%2Fcart&utm_source=x"
        )

    def test_discount_code_without_query(self):
        assert apply_discount_code("https://shop.example.com/checkout", "SAVE10") == (
            "https://shop.example.com/discount/SAVE10?redirect=%2Fcheckout"
        )

    def test_discount_code_with_product_destination(self, cart):
        properties = derive(
            cart,
            origin="https://shop.example.com",
            destination="product",
            utm_source="push",
            discount_code="SAVE10",
        )

        assert properties.url == (
            "https://shop.example.com/discount/SAVE10"
            "?redirect=%2Fproducts%2Flinen-shirt&variant=1&utm_source=push"
        )


class TestReminderOptions:
    """Tests for ReminderOptions parsing."""

    def test_camel_case_aliases(self):
        options = ReminderOptions.model_validate(
            {
                "disableCartReminder": True,
                "cartReminderStrategy": "most-expensive",
                "cartReminderDestination": "checkout",
                "cartReminderMessage": "Hurry!",
                "cartReminderDisableImage": True,
                "cartReminderDiscountCode": "SAVE10",
                "cartReminderUtmSource": "push",
                "cartReminderUtmContent": "product-name",
            }
        )

        assert options.disable_cart_reminder is True
        assert options.strategy == "most-expensive"
        assert options.destination == "checkout"
        assert options.message == "Hurry!"
        assert options.disable_image is True
        assert options.discount_code == "SAVE10"
        assert options.utm_source == "push"
        assert options.utm_content == "product-name"

    def test_defaults(self):
        options = ReminderOptions()

        assert options.strategy == "latest"
        assert options.destination == "cart"
        assert options.disable_cart_reminder is False

    def test_unknown_values_fall_back_to_defaults(self):
        options = ReminderOptions(strategy="cheapest", destination="checked")

        assert options.strategy == "latest"
        assert options.destination == "cart"


class TestTranslate:
    """Tests for the built-in translator."""

    @pytest.mark.parametrize(
        "locale,expected",
        [
            ("fr-FR", "Commandez avant qu'il ne soit trop tard !"),
            ("es", "¡Ordene antes de que sea demasiado tarde!"),
            ("pt_BR", "Encomende antes que seja tarde demais!"),
            ("ja-JP", DEFAULT_REMINDER_MESSAGE),
            ("", DEFAULT_REMINDER_MESSAGE),
        ],
    )
    def test_default_message(self, locale, expected):
        assert translate(DEFAULT_REMINDER_MESSAGE, locale) == expected

    def test_unknown_key_passes_through(self):
        assert make_translator("fr")("Hello") == "Hello"
