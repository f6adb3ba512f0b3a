"""Outbound calls to the Bilibili web API."""

import logging
from http.cookiejar import DefaultCookiePolicy

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

PAGELIST_PATH = "/x/player/pagelist"
VIEW_PATH = "/x/web-interface/view"
PLAYURL_PATH = "/x/player/playurl"

# The API rejects requests that do not look like they come from a browser.
BILI_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Referer": "https://www.bilibili.com/",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "same-site",
}


class FetchError(Exception):
    """Raised when a remote call fails at the transport level."""


class Fetcher:
    """Anything that can GET a URL and hand back the decoded JSON object."""

    def get_json(self, url, params=None, headers=None):
        raise NotImplementedError


class HttpFetcher(Fetcher):
    def __init__(self, timeout=10.0, max_retries=2):
        self.timeout = timeout
        self.session = requests.Session()
        # Upstream cookies are never stored, so requests stay independent.
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        # Only connection and read faults are retried, never a status code.
        retries = Retry(
            total=max_retries,
            connect=max_retries,
            read=max_retries,
            status=0,
            backoff_factor=0.5,
            raise_on_status=False,
        )
        self.session.mount("https://", HTTPAdapter(max_retries=retries))
        self.session.mount("http://", HTTPAdapter(max_retries=retries))

    def get_json(self, url, params=None, headers=None):
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise FetchError(str(e)) from e

        if not isinstance(payload, dict):
            raise FetchError(f"unexpected response body from {url}")
        return payload

    def close(self):
        self.session.close()


class BilibiliClient:
    """The three endpoints the resolver needs, on top of a Fetcher."""

    def __init__(self, fetcher, api_base="https://api.bilibili.com"):
        self.fetcher = fetcher
        self.api_base = api_base.rstrip("/")

    def pagelist(self, bvid):
        return self.fetcher.get_json(self.api_base + PAGELIST_PATH, params={"bvid": bvid}, headers=BILI_HEADERS)

    def view(self, bvid):
        return self.fetcher.get_json(self.api_base + VIEW_PATH, params={"bvid": bvid}, headers=BILI_HEADERS)

    def playurl(self, bvid, cid, qn, referer):
        params = {
            "bvid": bvid,
            "cid": cid,
            "qn": qn,
            "type": "",
            "otype": "json",
            "platform": "html5",
            "high_quality": 1,
        }
        headers = {**BILI_HEADERS, "Referer": referer}
        logger.debug(f"Requesting play url for {bvid} cid={cid} qn={qn}")
        return self.fetcher.get_json(self.api_base + PLAYURL_PATH, params=params, headers=headers)
