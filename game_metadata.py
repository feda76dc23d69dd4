"""
Game title lookup for reviewed Steam apps.

Titles come from the Store appdetails API, then from the og:title of the
profile's own review page, then a "Game <id>" placeholder.
"""

import html
import re

import requests


PROFILE_URL = 'https://steamcommunity.com/id/LeVioc/recommended/'
APPDETAILS_URL_TEMPLATE = 'https://store.steampowered.com/api/appdetails?appids={app_id}&l={language}'
API_LANGUAGE = 'french'
API_TIMEOUT = 5
HEADERS = {'User-Agent': 'Mozilla/5.0'}

OG_TITLE_PATTERN = re.compile(
    r'<meta property="og:title" content="[^:]*::[^:]*:: Review for ([^"]+)"', re.IGNORECASE
)


def placeholder_title(app_id):
    return f"Game {app_id}"


class GameTitleResolver:
    """Resolves app ids to display titles, caching every successful lookup."""

    def __init__(self, profile_url=PROFILE_URL, language=API_LANGUAGE, timeout=API_TIMEOUT):
        self.profile_url = profile_url
        self.language = language
        self.timeout = timeout
        self.cache = {}

    def resolve(self, app_id):
        app_id = str(app_id)
        if app_id in self.cache:
            return self.cache[app_id]

        title = self.fetch_store_title(app_id) or self.fetch_review_page_title(app_id)
        if title:
            self.cache[app_id] = title
            return title

        # Placeholders stay out of the cache so later calls retry the network
        return placeholder_title(app_id)

    def fetch_store_title(self, app_id):
        """Return the localized name from the Store API, or None"""
        url = APPDETAILS_URL_TEMPLATE.format(app_id=app_id, language=self.language)
        try:
            response = requests.get(url, headers=HEADERS, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            print(f"Warning: Store lookup failed for app {app_id}: {exc}")
            return None

        if not isinstance(payload, dict):
            return None
        entry = payload.get(app_id) or {}
        data = entry.get('data') or {}
        if entry.get('success') and data.get('name'):
            return data['name']
        return None

    def fetch_review_page_title(self, app_id):
        """Return the game title from the review page's og:title meta tag, or None"""
        url = f"{self.profile_url}{app_id}"
        try:
            response = requests.get(url, headers=HEADERS, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            print(f"Warning: Could not fetch review page for app {app_id}: {exc}")
            return None

        match = OG_TITLE_PATTERN.search(response.text)
        if match:
            return html.unescape(match.group(1))
        return None
