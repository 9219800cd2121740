"""Manual plugin runner for trying the signals against a live storefront.

Polls the storefront cart for a while and logs the published reminder
properties, or extracts the product shown on a product page.

Usage:
    python scripts/run_plugin.py --origin https://shop.example.com
    python scripts/run_plugin.py --origin https://shop.example.com --duration 30 --unsubscribed
    python scripts/run_plugin.py --origin https://shop.example.com --product-url https://shop.example.com/products/tee
"""

import argparse
import asyncio
import logging

import httpx

from storefront_signals import HostCapabilities, PageSnapshot, ShopifyPlugin
from storefront_signals.clients import StorefrontClient
from storefront_signals.sinks import LoggingSink

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


async def run_plugin(
    origin: str,
    duration: float,
    subscribed: bool,
    strategy: str,
    destination: str,
    product_url: str = None,
):
    """Run the plugin against a storefront and display what it computes.

    Args:
        origin: Shop origin (e.g., "https://shop.example.com")
        duration: How long to poll the cart, in seconds
        subscribed: Whether the visitor is treated as subscribed
        strategy: Cart line selection strategy
        destination: Reminder click destination
        product_url: Optional product page to extract instead of polling
    """
    async with httpx.AsyncClient(follow_redirects=True) as http_client:
        client = StorefrontClient(origin, http_client=http_client)
        page = PageSnapshot(url=product_url or origin + "/")

        if product_url:
            response = await http_client.get(product_url)
            page = PageSnapshot(url=product_url, html=response.text)

        async def is_subscribed() -> bool:
            return subscribed

        plugin = ShopifyPlugin(
            {"cartReminderStrategy": strategy, "cartReminderDestination": destination},
            HostCapabilities(
                fetch_cart=client.fetch_cart,
                fetch_product_page=client.fetch_product_page,
                current_page=lambda: page,
                sink=LoggingSink(),
                is_subscribed=is_subscribed,
            ),
            origin=origin,
        )

        print(f"\n{'='*70}")
        print(f"  Storefront: {origin}")
        print(f"{'='*70}\n")

        try:
            if product_url:
                product = await plugin.extractor.extract_current_product()
                if product is None:
                    print("⚠️  No product found on this page.\n")
                    return
                for key, value in product.to_dict().items():
                    print(f"    {key}: {value}")
                print()
                return

            plugin.start()
            await asyncio.sleep(duration)
            print(f"\n✅ Ran {plugin.poller.run_count} polling cycles\n")
        finally:
            plugin.close()


def main():
    """Parse arguments and run the plugin."""
    parser = argparse.ArgumentParser(
        description="Run the storefront signals plugin against a live shop",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_plugin.py --origin https://shop.example.com
  python scripts/run_plugin.py --origin https://shop.example.com --strategy most-expensive
  python scripts/run_plugin.py --origin https://shop.example.com --product-url https://shop.example.com/products/tee
        """,
    )

    parser.add_argument("--origin", required=True, help="Shop origin URL")
    parser.add_argument(
        "--duration",
        type=float,
        default=15,
        help="Seconds to poll the cart for (default: 15)",
    )
    parser.add_argument(
        "--unsubscribed",
        action="store_true",
        help="Treat the visitor as not subscribed (1 cycle in 10)",
    )
    parser.add_argument(
        "--strategy",
        default="latest",
        choices=["latest", "most-expensive", "least-expensive"],
    )
    parser.add_argument(
        "--destination",
        default="cart",
        choices=["product", "cart", "homepage", "checkout"],
    )
    parser.add_argument("--product-url", help="Extract the product shown on this page")

    args = parser.parse_args()

    asyncio.run(
        run_plugin(
            origin=args.origin.rstrip("/"),
            duration=args.duration,
            subscribed=not args.unsubscribed,
            strategy=args.strategy,
            destination=args.destination,
            product_url=args.product_url,
        )
    )


if __name__ == "__main__":
    main()
