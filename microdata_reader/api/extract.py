import asyncio
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from microdata_reader.config import MAX_HTMLS, MAX_URLS
from microdata_reader.extractors.microdata_extractor import MicrodataExtractor
from microdata_reader.schemas.response import ExtractResponse
from microdata_reader.services.fetcher import fetch_page
from microdata_reader.utils.html import make_soup

logger = logging.getLogger(__name__)

router = APIRouter()


def extract_html(html: str, types: Optional[List[str]] = None) -> Dict[str, Any]:
    soup = make_soup(html)
    return {"items": MicrodataExtractor.extract_microdata(soup, types)}


# --------------------------------------------------
# URL PROCESSOR
# --------------------------------------------------

async def process_url(url: str, types: Optional[List[str]] = None):

    try:
        page = await fetch_page(url)

        result = await run_in_threadpool(
            extract_html,
            page["html"],
            types
        )

        result["fetch_mode"] = page.get("fetch_mode")

        return url, result

    except Exception as e:
        logger.warning(f"Extraction failed for {url}: {e}")
        return url, {"error": str(e)}


# --------------------------------------------------
# HTML PROCESSOR
# --------------------------------------------------

async def process_html(i: int, html: str, types: Optional[List[str]] = None):

    try:
        result = await run_in_threadpool(
            extract_html,
            html,
            types
        )

        return f"html_{i}", result

    except ValueError as e:
        return f"html_{i}", {"error": str(e)}


def _require_list(payload: Dict[str, Any], key: str, limit: int) -> List[Any]:
    values = payload[key]

    if not isinstance(values, list) or not values:
        raise HTTPException(400, f"'{key}' must be a non-empty list")

    if len(values) > limit:
        raise HTTPException(400, f"Maximum {limit} {key} allowed")

    return values


# --------------------------------------------------
# EXTRACT ENDPOINT
# --------------------------------------------------

@router.post("/extract", response_model=ExtractResponse, response_model_exclude_none=True)
async def extract(payload: Dict[str, Any]):

    try:

        types = payload.get("types")
        if types is not None and not isinstance(types, list):
            raise HTTPException(400, "'types' must be a list")

        # ---------------- MULTIPLE URLS ----------------

        if "urls" in payload:

            urls = _require_list(payload, "urls", MAX_URLS)

            results_list = await asyncio.gather(
                *[process_url(url, types) for url in urls]
            )

            return {
                "total": len(results_list),
                "results": dict(results_list)
            }

        # ---------------- SINGLE URL ----------------

        if "url" in payload:

            key, value = await process_url(payload["url"], types)

            return {
                "total": 1,
                "results": {key: value}
            }

        # ---------------- MULTIPLE HTML ----------------

        if "htmls" in payload:

            htmls = _require_list(payload, "htmls", MAX_HTMLS)

            results_list = await asyncio.gather(*[
                process_html(i, html, types)
                for i, html in enumerate(htmls, start=1)
            ])

            return {
                "total": len(results_list),
                "results": dict(results_list)
            }

        # ---------------- SINGLE HTML ----------------

        if "html" in payload:

            key, value = await process_html(1, payload["html"], types)

            return {
                "total": 1,
                "results": {key: value}
            }

        raise HTTPException(
            400,
            "Provide 'url', 'urls', 'html', or 'htmls'"
        )

    except HTTPException:
        raise

    except Exception as e:
        logger.exception("Extraction request failed")
        raise HTTPException(500, str(e))
