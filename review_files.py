"""
Markdown and image output for scraped reviews.

Every review becomes pages/reviews/<app_id>.md with a front-matter header, and
the game's capsule art is stored once as assets/images/apps/<app_id>.jpg.
Existing files are never rewritten.
"""

import os

import requests
from tqdm import tqdm


OUTPUT_DIR = 'pages/reviews'
IMAGE_DIR = 'assets/images/apps'
IMAGE_URL_PREFIX = 'images/apps'
IMAGE_TIMEOUT = 30
STEAM_IMAGE_URL = 'https://shared.akamai.steamstatic.com/store_item_assets/steam/apps/{app_id}/capsule_616x353.jpg'
STEAM_IMAGE_URL_FALLBACK = 'https://cdn.akamai.steamstatic.com/steam/apps/{app_id}/header.jpg'


def review_path(app_id, output_dir=OUTPUT_DIR):
    return os.path.join(output_dir, f"{app_id}.md")


def image_path(app_id, image_dir=IMAGE_DIR):
    return os.path.join(image_dir, f"{app_id}.jpg")


def quote_title(title):
    """Double-quote a title for the YAML header"""
    escaped = title.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def render_review(review):
    """Build the Markdown document (header + body) for a review"""
    lines = [
        '---',
        f"title: {quote_title(review.title)}",
        f"date: {review.date}",
        f"recommended: {'true' if review.recommended else 'false'}",
        f"playtime: {review.playtime}",
        f"image: {IMAGE_URL_PREFIX}/{review.app_id}.jpg",
        '---',
        review.content,
    ]
    return '\n'.join(lines) + '\n'


def fetch_image(url, timeout=IMAGE_TIMEOUT):
    """Download raw bytes, returning b'' on any network error or bad status"""
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        tqdm.write(f"    Warning: Image request failed for {url}: {exc}")
        return b''
    return response.content


def save_atomically(path, data, mode='wb', encoding=None):
    """Write through a .part file so an interrupted write never leaves a truncated target"""
    partial = path + '.part'
    try:
        with open(partial, mode, encoding=encoding) as f:
            f.write(data)
        os.replace(partial, path)
    except OSError:
        if os.path.exists(partial):
            os.remove(partial)
        raise


def download_image(app_id, image_dir=IMAGE_DIR, timeout=IMAGE_TIMEOUT):
    """
    Make sure <image_dir>/<app_id>.jpg exists.

    The capsule image is tried first and the older header image second.
    Returns False only when neither URL yields any bytes or the file cannot be saved.
    """
    path = image_path(app_id, image_dir)
    if os.path.exists(path):
        tqdm.write(f"    Image OK: {app_id}.jpg")
        return True

    data = fetch_image(STEAM_IMAGE_URL.format(app_id=app_id), timeout)
    if not data:
        data = fetch_image(STEAM_IMAGE_URL_FALLBACK.format(app_id=app_id), timeout)

    if not data:
        tqdm.write(f"    Warning: No image available for {app_id}")
        return False

    try:
        os.makedirs(image_dir, exist_ok=True)
        save_atomically(path, data)
    except OSError as exc:
        tqdm.write(f"    Warning: Could not save image {path}: {exc}")
        return False

    tqdm.write(f"    Image: {app_id}.jpg ({len(data)} bytes)")
    return True


def write_review_file(review, output_dir=OUTPUT_DIR, image_dir=IMAGE_DIR, image_timeout=IMAGE_TIMEOUT):
    """
    Write the review's Markdown file unless one already exists.

    The image is only downloaded when a new file is created. Returns True for
    a new file, False when an existing file was left untouched or the file
    could not be written.
    """
    path = review_path(review.app_id, output_dir)
    if os.path.exists(path):
        tqdm.write(f"  Already exists: {review.app_id}.md")
        return False

    try:
        os.makedirs(output_dir, exist_ok=True)
        save_atomically(path, render_review(review), mode='w', encoding='utf-8')
    except OSError as exc:
        tqdm.write(f"  Warning: Could not write {path}: {exc}")
        return False
    tqdm.write(f"  Created: {review.app_id}.md")

    download_image(review.app_id, image_dir=image_dir, timeout=image_timeout)
    return True
