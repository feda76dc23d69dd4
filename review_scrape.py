"""
Steam Profile Review Exporter
Scrapes a Steam Community profile's reviews into Markdown files with cover images
"""

import argparse
import os
import re
from dataclasses import dataclass
from time import sleep, time
from typing import List, Tuple

import requests
from tqdm import tqdm

from game_metadata import API_LANGUAGE, PROFILE_URL, GameTitleResolver
from review_files import IMAGE_DIR, OUTPUT_DIR, review_path, write_review_file
from review_parsing import MIN_CONTENT_LENGTH, ReviewParsingHelper


# Configuration
LISTING_TIMEOUT = 15
PAGE_DELAY = 2.0
ITEM_DELAY = 0.2
MAX_PAGES = 14
PAGE_PRESETS = {'test': 1, 'all': MAX_PAGES}
LISTING_HEADERS = {
    'User-Agent': 'Mozilla/5.0',
    'Accept-Language': 'fr-FR',
}
RULE_WIDTH = 70

ITEM_LINK_PATTERN = re.compile(r'/recommended/(\d+)/')


@dataclass(frozen=True)
class Review:
    app_id: str
    title: str
    date: str  # YYYY-MM-DD
    recommended: bool
    playtime: float  # hours on record
    content: str


def get_listing_url(page_num, profile_url=PROFILE_URL):
    return f"{profile_url}?p={page_num}"


def fetch_listing_page(page_num, profile_url=PROFILE_URL, timeout=LISTING_TIMEOUT):
    """Fetch one listing page, returning '' when the request fails"""
    url = get_listing_url(page_num, profile_url)
    try:
        response = requests.get(url, headers=LISTING_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        print(f"  Warning: Could not fetch page {page_num}: {exc}")
        return ''
    return response.text


def find_app_ids(html):
    """App ids linked from the page, in first-seen order"""
    app_ids = []
    seen = set()
    for app_id in ITEM_LINK_PATTERN.findall(html):
        if app_id in seen:
            continue
        seen.add(app_id)
        app_ids.append(app_id)
    return app_ids


def find_review_block(html, app_id):
    """
    Markup for one review: from the app link up to the next review box,
    the paging controls, or the end of the page.
    """
    pattern = (
        r'/app/' + re.escape(app_id)
        + r'[^\w].*?(?=(<div class="review_box"|<div class="review_paging"|$))'
    )
    match = re.search(pattern, html, re.DOTALL)
    return match.group(0) if match else None


def extract_reviews(html, resolver, item_delay=ITEM_DELAY) -> List[Review]:
    """Extract every review with enough text from a listing page"""
    reviews = []

    for app_id in find_app_ids(html):
        block = find_review_block(html, app_id)
        if block is None:
            continue

        content = ReviewParsingHelper.extract_content(block)
        if len(content) < MIN_CONTENT_LENGTH:
            print(f"  Skipping {app_id}: no review text")
            continue

        review = Review(
            app_id=app_id,
            title=resolver.resolve(app_id),
            date=ReviewParsingHelper.parse_block_date(block),
            recommended=ReviewParsingHelper.is_recommended(block),
            playtime=ReviewParsingHelper.parse_playtime(block),
            content=content,
        )
        reviews.append(review)
        verdict = 'recommended' if review.recommended else 'not recommended'
        print(f"  {review.title} - {review.playtime}h - {review.date} ({verdict})")

        # Keep the Store API request rate low
        sleep(item_delay)

    return reviews


def scrape_pages(
    pages,
    resolver,
    profile_url=PROFILE_URL,
    page_delay=PAGE_DELAY,
    item_delay=ITEM_DELAY,
) -> List[Review]:
    """Scrape listing pages 1..pages in order"""
    all_reviews = []

    for page_num in range(1, pages + 1):
        print(f"\nPage {page_num}...")
        html = fetch_listing_page(page_num, profile_url)
        page_reviews = extract_reviews(html, resolver, item_delay=item_delay) if html else []
        print(f"  -> {len(page_reviews)} review(s)")
        all_reviews.extend(page_reviews)

        if page_num < pages:
            print(f"Waiting {page_delay}s...")
            sleep(page_delay)

    return all_reviews


def dedupe_reviews(reviews):
    """Keep the first review seen for each app id"""
    unique = []
    seen = set()
    for review in reviews:
        if review.app_id in seen:
            continue
        seen.add(review.app_id)
        unique.append(review)
    return unique


def write_reviews(reviews, output_dir=OUTPUT_DIR, image_dir=IMAGE_DIR) -> Tuple[int, int, int]:
    """Write review files, returning (created, skipped, failed)"""
    created = 0
    skipped = 0
    failed = 0
    for review in tqdm(reviews, desc="Writing reviews"):
        tqdm.write(review.title)
        if write_review_file(review, output_dir=output_dir, image_dir=image_dir):
            created += 1
        elif os.path.exists(review_path(review.app_id, output_dir)):
            skipped += 1
        else:
            failed += 1
    return created, skipped, failed


def print_rule(char='='):
    print(char * RULE_WIDTH)


def run(
    pages,
    profile_url=PROFILE_URL,
    output_dir=OUTPUT_DIR,
    image_dir=IMAGE_DIR,
    language=API_LANGUAGE,
    page_delay=PAGE_DELAY,
    item_delay=ITEM_DELAY,
):
    """Scrape, dedupe and write; returns (created, skipped, total)"""
    start = time()
    resolver = GameTitleResolver(profile_url=profile_url, language=language)

    print(f"\nPhase 1: extracting {pages} page(s) from {profile_url}")
    reviews = scrape_pages(
        pages,
        resolver,
        profile_url=profile_url,
        page_delay=page_delay,
        item_delay=item_delay,
    )
    unique = dedupe_reviews(reviews)
    print(f"\n{len(unique)} unique review(s)")

    print("\nPhase 2: writing files")
    created, skipped, failed = write_reviews(unique, output_dir=output_dir, image_dir=image_dir)

    print_rule()
    print("DONE")
    print_rule()
    print(f"  New:      {created}")
    print(f"  Existing: {skipped}")
    if failed:
        print(f"  Failed:   {failed}")
    print(f"  Total:    {len(unique)}")
    print(f"  Duration: {time() - start:.1f}s")
    print_rule()
    if created > 0:
        print(f"\nReviews: {output_dir}/")
        print(f"Images: {image_dir}/")

    return created, skipped, len(unique)


def parse_page_count(mode):
    """Map 'test', 'all' or a number to a page count in [1, MAX_PAGES]"""
    mode = (mode or 'test').strip().lower()
    if mode in PAGE_PRESETS:
        return PAGE_PRESETS[mode]
    # Leading digits count, so "3pages" means 3
    match = re.match(r'[+-]?\d+', mode)
    if not match:
        return 1
    return max(1, min(MAX_PAGES, int(match.group(0))))


def parse_args(argv=None):
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        description="Export a Steam profile's reviews to Markdown",
        epilog=f"mode: 'test' = 1 page, 'all' = {MAX_PAGES} pages, or a number from 1 to {MAX_PAGES}",
    )
    parser.add_argument('mode', nargs='?', default='', help='test, all, or a page count')
    parser.add_argument('--profile-url', default=PROFILE_URL, help='Profile recommended/ listing URL')
    parser.add_argument('--output-dir', default=OUTPUT_DIR, help='Directory for Markdown files')
    parser.add_argument('--image-dir', default=IMAGE_DIR, help='Directory for cover images')
    parser.add_argument('--language', default=API_LANGUAGE, help='Store API language for titles')
    parser.add_argument('--page-delay', type=float, default=PAGE_DELAY,
                        help='Wait (seconds) between listing pages')
    parser.add_argument('--item-delay', type=float, default=ITEM_DELAY,
                        help='Wait (seconds) after each extracted review')
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution function"""
    args = parse_args(argv)

    print_rule()
    print(" Steam review export")
    print_rule()

    if not args.mode:
        print(f"\nUsage: steam-review-export [test|all|1-{MAX_PAGES}]")
        print("  test = 1 page")
        print(f"  all  = {MAX_PAGES} pages")
        print(f"  1-{MAX_PAGES} = number of pages\n")

    pages = parse_page_count(args.mode)
    run(
        pages,
        profile_url=args.profile_url,
        output_dir=args.output_dir,
        image_dir=args.image_dir,
        language=args.language,
        page_delay=args.page_delay,
        item_delay=args.item_delay,
    )


if __name__ == "__main__":
    main()
