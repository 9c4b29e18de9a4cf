"""
MediaWiki API client for PCGamingWiki.

Fetches category listings, page revisions and raw wikitext through
`api.php`, then hands the template nodes to the extractor. Only templates
and their parameters are parsed; the rest of the markup is ignored.

Rate limiting: requests are spaced by Config.WIKI_REQUEST_DELAY as a
courtesy to the wiki. Failed requests are retried with exponential
backoff and raise WikiApiError once retries run out.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

import mwparserfromhell
import requests

from ..config import Config
from ..errors import WikiApiError

logger = logging.getLogger(__name__)


# Titles per prop=revisions request (API limit for normal clients)
REVISION_BATCH_SIZE = 50


# ─── Data Classes ────────────────────────────────────────────────────────────

@dataclass
class TemplateNode:
    """A template call on a page: its name and string parameters."""
    name: str
    params: dict[str, str] = field(default_factory=dict)

    def get(self, key: str, default: str = "") -> str:
        return self.params.get(key, default)

    def __str__(self) -> str:
        args = "".join(
            f"|{value}" if key.isdigit() else f"|{key}={value}"
            for key, value in self.params.items()
        )
        return "{{" + self.name + args + "}}"


@dataclass
class CategoryPage:
    """A page returned by a category listing."""
    page_id: int
    title: str


@dataclass
class WikiPage:
    """Latest revision of a page."""
    title: str
    page_id: Optional[int] = None
    rev_id: Optional[int] = None  # None when the page is missing
    templates: list[TemplateNode] = field(default_factory=list)


# ─── Wikitext ────────────────────────────────────────────────────────────────

def normalize_template_name(name: str) -> str:
    """Normalize a template name the way MediaWiki does.

    "game_data/saves " -> "Game data/saves"
    """
    name = " ".join(name.replace("_", " ").split())
    if name.lower().startswith("template:"):
        name = name[len("template:"):].lstrip()
    return name[:1].upper() + name[1:]


def parse_templates(wikitext: str) -> list[TemplateNode]:
    """Extract every template (including nested ones) from wikitext."""
    nodes = []
    code = mwparserfromhell.parse(wikitext)
    for template in code.filter_templates(recursive=True):
        params = {}
        for param in template.params:
            params[str(param.name).strip()] = str(param.value).strip()
        nodes.append(TemplateNode(name=normalize_template_name(str(template.name)), params=params))
    return nodes


# ─── Client ──────────────────────────────────────────────────────────────────

class WikiClient:
    """Synchronous MediaWiki API client."""

    def __init__(
        self,
        api_url: str = "",
        user_agent: str = "",
        request_delay: Optional[float] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ):
        self.api_url = api_url or Config.WIKI_API_URL
        self.request_delay = Config.WIKI_REQUEST_DELAY if request_delay is None else request_delay
        self.timeout = Config.WIKI_REQUEST_TIMEOUT if timeout is None else timeout
        self.max_retries = Config.WIKI_MAX_RETRIES if max_retries is None else max_retries

        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": user_agent or Config.WIKI_USER_AGENT,
        })
        self._last_request_time = 0.0

    def _rate_limit(self):
        """Enforce minimum delay between requests."""
        now = time.time()
        elapsed = now - self._last_request_time
        if elapsed < self.request_delay:
            time.sleep(self.request_delay - elapsed)
        self._last_request_time = time.time()

    def _api_query(self, params: dict) -> dict:
        """Make a MediaWiki API query with error handling and retries.

        Raises:
            WikiApiError: When every attempt failed or the API reported an error
        """
        params = {**params, "format": "json", "formatversion": "2"}
        last_error: Exception | None = None

        for attempt in range(self.max_retries):
            self._rate_limit()
            try:
                resp = self._session.get(self.api_url, params=params, timeout=self.timeout)
                resp.raise_for_status()
                data = resp.json()
            except (requests.RequestException, ValueError) as e:
                last_error = e
                logger.warning(f"[Wiki] API error (attempt {attempt+1}): {e}")
                if attempt < self.max_retries - 1:
                    time.sleep(2 ** attempt)
                continue

            if "error" in data:
                error = data["error"]
                raise WikiApiError(f"{error.get('code', 'unknown')}: {error.get('info', '')}")
            return data

        raise WikiApiError(f"Max retries exceeded for {params.get('action')}: {last_error}")

    def get_category_members(self, category: str) -> list[CategoryPage]:
        """List every page in a category, following continuation."""
        pages = []
        params = {
            "action": "query",
            "list": "categorymembers",
            "cmtitle": f"Category:{category}",
            "cmtype": "page",
            "cmlimit": "500",
        }

        while True:
            result = self._api_query(params)
            for member in result.get("query", {}).get("categorymembers", []):
                pages.append(CategoryPage(page_id=member["pageid"], title=member["title"]))

            cont = result.get("continue")
            if not cont:
                break
            params = {**params, **cont}

        logger.info(f"[Wiki] Category '{category}': {len(pages)} pages")
        return pages

    def get_page(self, title: str) -> WikiPage:
        """Fetch the latest revision of a page and parse its templates."""
        result = self._api_query({
            "action": "query",
            "prop": "revisions",
            "rvprop": "ids|content",
            "rvslots": "main",
            "titles": title,
        })
        pages = result.get("query", {}).get("pages", [])
        if not pages or pages[0].get("missing"):
            logger.warning(f"[Wiki] Page not found: {title}")
            return WikiPage(title=title)

        info = pages[0]
        revisions = info.get("revisions") or [{}]
        revision = revisions[0]
        content = revision.get("slots", {}).get("main", {}).get("content", "")

        return WikiPage(
            title=info.get("title", title),
            page_id=info.get("pageid"),
            rev_id=revision.get("revid"),
            templates=parse_templates(content) if content else [],
        )

    def get_latest_revisions(self, titles: list[str]) -> dict[str, int]:
        """Latest revision id per title. Missing pages are left out."""
        latest = {}
        for start in range(0, len(titles), REVISION_BATCH_SIZE):
            batch = titles[start:start + REVISION_BATCH_SIZE]
            result = self._api_query({
                "action": "query",
                "prop": "revisions",
                "rvprop": "ids",
                "titles": "|".join(batch),
            })
            query = result.get("query", {})

            # The API reports normalized titles under their canonical form
            renamed = {n["to"]: n["from"] for n in query.get("normalized", [])}
            for page in query.get("pages", []):
                revisions = page.get("revisions")
                if page.get("missing") or not revisions:
                    continue
                title = renamed.get(page["title"], page["title"])
                latest[title] = revisions[0]["revid"]

        logger.debug(f"[Wiki] Fetched latest revisions for {len(latest)}/{len(titles)} pages")
        return latest
