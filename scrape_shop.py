#!/usr/bin/env python3
"""
Shop Review Crawl

Estimates product sales for a shop from its review listing and saves the
ranked products as JSON and/or CSV. Missing arguments are asked for
interactively.

Usage:
    python3 scrape_shop.py https://www.etsy.com/ca/shop/MyShop
    python3 scrape_shop.py https://www.etsy.com/shop/MyShop --pages 5 --format both
    python3 scrape_shop.py MyShopUrl --pages 3 --detail-workers 8 --skip-failed-pages

Press Ctrl+C once to stop issuing requests and save a partial result;
press it again to abort immediately.
"""

import argparse
import signal
import sys

from dotenv import load_dotenv

from shop_reviews import ReviewPipeline
from shop_reviews.aggregation import top_products
from shop_reviews.common import load_crawler_config, parse_shop_name, setup_logging
from shop_reviews.errors import ListingFetchError, ResolutionError
from shop_reviews.export import EXPORT_FORMATS, export_records


def prompt_url() -> str:
    return input("Please provide a shop URL for scraping: ").strip()


def prompt_pages(max_pages: int) -> int:
    """Ask until a page count in 1..max_pages is entered."""
    while True:
        raw = input(f"How many pages would you like to parse? (Max: {max_pages}) ").strip()
        if raw.isdigit() and 1 <= int(raw) <= max_pages:
            return int(raw)
        print(f"Invalid input. Please enter a number between 1 and {max_pages}")


def prompt_format() -> str:
    """Ask until json, csv or both is entered."""
    while True:
        raw = input("In which format would you like to save the result? (json/csv/both) ").strip().lower()
        if raw in EXPORT_FORMATS:
            return raw
        print("Invalid input. Please enter 'json', 'csv', or 'both'")


def print_top_products(records, n: int = 10) -> None:
    """Print the top-n products by review count."""
    top = top_products(records, n)
    if not top:
        return
    print("\n" + "-" * 60)
    print(f"Top {len(top)} Products by Sales Count")
    print("-" * 60)
    for idx, record in enumerate(top, 1):
        name = record.product_name
        if len(name) > 40:
            name = name[:37] + "..."
        price = f"{record.currency} {record.price_amount}" if record.price_amount else "-"
        print(f"  {idx:>2}. {name:<40} {record.occurrence_count:>5}  {price}")


def install_cancel_handler(pipeline: ReviewPipeline) -> None:
    """First Ctrl+C cancels gracefully; the second one aborts."""
    def handler(signum, frame):
        print("\nStopping after in-flight requests... (Ctrl+C again to abort)")
        pipeline.cancel()
        signal.signal(signal.SIGINT, signal.default_int_handler)

    signal.signal(signal.SIGINT, handler)


def main():
    parser = argparse.ArgumentParser(
        description="Estimate product sales for a shop from its review listing"
    )
    parser.add_argument(
        "url",
        nargs="?",
        help="Shop URL (prompted for if omitted)"
    )
    parser.add_argument(
        "--pages", "-p",
        type=int,
        help="Number of listing pages to crawl (prompted for if omitted)"
    )
    parser.add_argument(
        "--format", "-f",
        choices=EXPORT_FORMATS,
        help="Output format (prompted for if omitted)"
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=".",
        help="Directory for shop_reviews.json / shop_reviews.csv (default: .)"
    )
    parser.add_argument(
        "--config",
        help="Crawler YAML config (default: config/crawler.yaml)"
    )
    parser.add_argument(
        "--listing-workers",
        type=int,
        help="Concurrent listing page requests"
    )
    parser.add_argument(
        "--detail-workers",
        type=int,
        help="Concurrent product page requests"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-request timeout in seconds"
    )
    parser.add_argument(
        "--skip-failed-pages",
        action="store_true",
        default=None,
        help="Skip unreachable listing pages instead of aborting (counts become lower bounds)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    load_dotenv()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    url = args.url or prompt_url()
    print(f"URL provided: {url}")

    try:
        shop_name = parse_shop_name(url)
    except ValueError:
        print("Invalid shop URL. Please provide a valid shop URL.")
        sys.exit(1)

    try:
        config = load_crawler_config(args.config, overrides={
            "listing_workers": args.listing_workers,
            "detail_workers": args.detail_workers,
            "request_timeout": args.timeout,
            "skip_failed_pages": args.skip_failed_pages,
        })
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    with ReviewPipeline(config) as pipeline:
        try:
            max_pages = pipeline.resolve_max_pages(shop_name)
        except ResolutionError as e:
            print(f"\n{e}")
            sys.exit(1)
        print(f"Maximum possible pages: {max_pages}")

        pages = args.pages
        if pages is not None and not 1 <= pages <= max_pages:
            print(f"Invalid page count {pages}; must be between 1 and {max_pages}")
            pages = None
        if pages is None:
            pages = prompt_pages(max_pages)

        fmt = args.format or prompt_format()

        print("=" * 60)
        print("Shop Review Crawl")
        print("=" * 60)
        print(f"  Shop:             {shop_name}")
        print(f"  Pages:            {pages} of {max_pages}")
        print(f"  Listing workers:  {config.listing_workers}")
        print(f"  Detail workers:   {config.detail_workers}")
        print(f"  Skip failed pages: {'YES' if config.skip_failed_pages else 'NO'}")
        print(f"  Output:           {fmt} -> {args.output_dir}")

        install_cancel_handler(pipeline)
        try:
            result = pipeline.run(shop_name, pages=pages, max_pages=max_pages)
        except ListingFetchError as e:
            print(f"\nCrawl aborted at page {e.page}: {e}")
            sys.exit(1)
        finally:
            signal.signal(signal.SIGINT, signal.default_int_handler)

        pipeline.tracker.print_final_report(
            unique_products=len(result.records),
            incomplete=result.incomplete,
            lower_bound_counts=result.lower_bound_counts,
        )
        if pipeline.tracker.has_critical_failures():
            print("\nWARNING: more than half of the product pages failed; "
                  "prices and images are mostly missing")

    for path in export_records(result.records, fmt, args.output_dir):
        print(f"Reviews saved to {path}")

    print_top_products(result.records)

    sys.exit(2 if result.incomplete else 0)


if __name__ == "__main__":
    main()
