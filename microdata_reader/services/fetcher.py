import asyncio
import logging

import requests
from fastapi.concurrency import run_in_threadpool
from playwright.sync_api import sync_playwright

from microdata_reader.config import (
    DYNAMIC_FALLBACK,
    MAX_HTML_SIZE,
    REQUEST_TIMEOUT,
)
from microdata_reader.utils.html import visible_text_length

MIN_VISIBLE_TEXT = 300

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}

logger = logging.getLogger(__name__)


def is_js_shell(html: str) -> bool:
    """
    A page with almost no text and no microdata was probably rendered client-side
    """
    if "itemscope" in html:
        return False
    return visible_text_length(html) < MIN_VISIBLE_TEXT


def fetch_static(url: str) -> str | None:
    try:
        r = requests.get(
            url,
            headers=HEADERS,
            timeout=REQUEST_TIMEOUT,
            allow_redirects=True
        )
        r.raise_for_status()
        return r.text[:MAX_HTML_SIZE]
    except requests.RequestException as e:
        logger.warning(f"Static fetch failed: {e}")
        return None


def fetch_dynamic_sync(url: str) -> str:
    with sync_playwright() as p:
        browser = p.chromium.launch(
            headless=True,
            args=[
                "--disable-blink-features=AutomationControlled",
                "--no-sandbox",
                "--disable-dev-shm-usage"
            ]
        )

        try:
            page = browser.new_page()
            page.set_extra_http_headers({
                "Accept-Language": "en-US,en;q=0.9"
            })

            # networkidle never settles on pages with long polling
            page.goto(url, wait_until="domcontentloaded", timeout=60000)
            page.wait_for_selector("body", timeout=15000)
            page.wait_for_timeout(3000)

            html = page.content()
        finally:
            browser.close()

        return html[:MAX_HTML_SIZE]


async def fetch_page(url: str) -> dict:
    logger.info(f"Fetching: {url}")

    # requests and the shell check block, keep them off the event loop
    html = await run_in_threadpool(fetch_static, url)
    fetch_mode = "static"

    if html and not await run_in_threadpool(is_js_shell, html):
        logger.info(f"[STATIC] html_size={len(html)} accepted")
        return {"url": url, "fetch_mode": fetch_mode, "html": html}

    if not DYNAMIC_FALLBACK:
        if html is None:
            raise ValueError(f"Could not fetch {url}")
        logger.info("Static page looks like a JS shell, dynamic fallback disabled")
        return {"url": url, "fetch_mode": fetch_mode, "html": html}

    logger.info("Falling back to dynamic rendering")

    loop = asyncio.get_running_loop()
    html = await loop.run_in_executor(
        None,
        fetch_dynamic_sync,
        url
    )

    logger.info(f"[DYNAMIC] html_size={len(html)}")

    return {"url": url, "fetch_mode": "dynamic", "html": html}
