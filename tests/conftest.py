"""Shared fixtures: canned Steam markup and fake HTTP responses."""

from unittest.mock import Mock

import pytest
import requests


LISTING_PAGE = """
<html><body>
<div class="review_box">
  <div class="leftcol">
    <a href="https://steamcommunity.com/app/570/"><img src="capsule_184x69.jpg"></a>
    <div class="hours">12.5 hrs on record</div>
  </div>
  <div class="rightcol">
    <div class="vote_header">
      <div class="thumb"><a href="https://steamcommunity.com/id/LeVioc/recommended/570/"><img src="https://community.akamai.steamstatic.com/public/shared/images/userreviews/icon_thumbsUp.png?v=1"></a></div>
      <div class="title"><a href="https://steamcommunity.com/id/LeVioc/recommended/570/">Recommended</a></div>
    </div>
    <div class="posted">Posted 5 January, 2021</div>
    <div class="content">Deep, punishing and endlessly rewarding.<br>I keep coming back &amp; so will you.</div>
  </div>
</div>
<div class="review_box">
  <div class="leftcol">
    <a href="https://steamcommunity.com/app/440/"><img src="capsule_184x69.jpg"></a>
    <div class="hours">3,2 h en tout</div>
  </div>
  <div class="rightcol">
    <div class="title"><a href="https://steamcommunity.com/id/LeVioc/recommended/440/">Recommandé</a></div>
    <div class="posted">Publiée le 5 février 2021.</div>
    <div class="content">Bof.</div>
  </div>
</div>
<div class="review_box">
  <div class="leftcol">
    <a href="https://steamcommunity.com/app/730/"><img src="capsule_184x69.jpg"></a>
    <div class="hours">3,2 h en tout</div>
  </div>
  <div class="rightcol">
    <div class="vote_header">
      <div class="thumb"><a href="https://steamcommunity.com/id/LeVioc/recommended/730/"><img src="https://community.akamai.steamstatic.com/public/shared/images/userreviews/icon_thumbsDown.png?v=1"></a></div>
      <div class="title"><a href="https://steamcommunity.com/id/LeVioc/recommended/730/">Non recommandé</a></div>
    </div>
    <div class="posted">Publiée le 5 février 2021.</div>
    <div class="content">Trop de tricheurs en partie classée, dommage.</div>
  </div>
</div>
<div class="review_paging">
  <a href="https://steamcommunity.com/id/LeVioc/recommended/?p=2">&gt;</a>
</div>
</body></html>
"""


def make_response(text='', json_data=None, content=b'', ok=True):
    """Build a stand-in for requests.Response"""
    response = Mock()
    response.text = text
    response.content = content
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    if ok:
        response.raise_for_status.return_value = None
    else:
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    return response


def appdetails_payload(app_id, name):
    return {str(app_id): {'success': True, 'data': {'name': name}}}


@pytest.fixture
def listing_page():
    return LISTING_PAGE
