"""
Unit tests for GameTitleResolver.

requests.get is patched throughout; no test touches the network.
"""

from unittest.mock import patch

import pytest
import requests

from conftest import appdetails_payload, make_response
from game_metadata import GameTitleResolver

OG_PAGE = (
    '<html><head><meta property="og:title" '
    'content="Steam Community :: LeVioc :: Review for Tom Clancy&#39;s The Division&trade;">'
    '</head></html>'
)


@pytest.fixture
def resolver():
    return GameTitleResolver(profile_url="https://steamcommunity.com/id/tester/recommended/")


def test_store_api_title_is_used_and_cached(resolver):
    with patch('game_metadata.requests.get') as mock_get:
        mock_get.return_value = make_response(json_data=appdetails_payload(570, "Dota 2"))
        assert resolver.resolve("570") == "Dota 2"
        assert resolver.resolve("570") == "Dota 2"

    assert mock_get.call_count == 1
    url = mock_get.call_args[0][0]
    assert "appids=570" in url
    assert "l=french" in url
    assert mock_get.call_args[1]['timeout'] == 5
    assert resolver.cache == {"570": "Dota 2"}


def test_numeric_app_id_is_normalized(resolver):
    with patch('game_metadata.requests.get') as mock_get:
        mock_get.return_value = make_response(json_data=appdetails_payload(570, "Dota 2"))
        assert resolver.resolve(570) == "Dota 2"
    assert "570" in resolver.cache


def test_falls_back_to_review_page_og_title(resolver):
    responses = [
        make_response(json_data={"221380": {"success": False}}),
        make_response(text=OG_PAGE),
    ]
    with patch('game_metadata.requests.get', side_effect=responses) as mock_get:
        title = resolver.resolve("221380")

    assert title == "Tom Clancy's The Division™"
    assert mock_get.call_args_list[1][0][0] == "https://steamcommunity.com/id/tester/recommended/221380"
    assert resolver.cache["221380"] == title


def test_api_network_error_falls_back(resolver):
    responses = [requests.ConnectionError("boom"), make_response(text=OG_PAGE)]
    with patch('game_metadata.requests.get', side_effect=responses):
        assert resolver.resolve("221380") == "Tom Clancy's The Division™"


def test_api_missing_name_falls_back(resolver):
    responses = [
        make_response(json_data={"10": {"success": True, "data": {}}}),
        make_response(text=OG_PAGE),
    ]
    with patch('game_metadata.requests.get', side_effect=responses):
        assert resolver.resolve("10") == "Tom Clancy's The Division™"


def test_placeholder_is_not_cached(resolver):
    responses = [
        make_response(json_data=None),
        make_response(text="<html>no meta</html>"),
        make_response(json_data=appdetails_payload(42, "Answer Quest")),
    ]
    with patch('game_metadata.requests.get', side_effect=responses) as mock_get:
        assert resolver.resolve("42") == "Game 42"
        assert "42" not in resolver.cache
        assert resolver.resolve("42") == "Answer Quest"

    assert mock_get.call_count == 3


def test_everything_failing_never_raises(resolver):
    with patch('game_metadata.requests.get', side_effect=requests.Timeout("slow")):
        assert resolver.resolve("99") == "Game 99"


def test_review_page_http_error(resolver):
    responses = [make_response(json_data=[]), make_response(text=OG_PAGE, ok=False)]
    with patch('game_metadata.requests.get', side_effect=responses):
        assert resolver.resolve("7") == "Game 7"
