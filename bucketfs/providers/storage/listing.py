"""Parsing and pagination of ``list-type=2`` bucket listings."""

import logging
import xml.etree.ElementTree
from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

DELIMITER = "/"

# Given the query parameters of one page, returns the response body or None
PageFetcher = Callable[[Dict[str, str]], Awaitable[Optional[bytes]]]


@dataclass
class ListingPage:
    """One page of a delimiter listing."""

    keys: List[str] = field(default_factory=list)
    prefixes: List[str] = field(default_factory=list)
    next_token: Optional[str] = None


def _local_name(tag: str) -> str:
    # "{http://s3.amazonaws.com/doc/2006-03-01/}Contents" -> "Contents"
    return tag.rsplit("}", 1)[-1]


def _child_texts(element: xml.etree.ElementTree.Element, name: str) -> List[str]:
    return [
        child.text or ""
        for child in element
        if _local_name(child.tag) == name
    ]


def parse_listing(body: bytes) -> ListingPage:
    """Parse a ``ListBucketResult`` document.

    ``Contents/Key`` become keys, ``CommonPrefixes/Prefix`` become prefixes
    and ``NextContinuationToken`` the token of the next page. Elements are
    matched on their local name so namespaced and bare documents both work.

    Raises:
        xml.etree.ElementTree.ParseError: If the body isn't well formed XML
    """
    root = xml.etree.ElementTree.fromstring(body)
    page = ListingPage()

    for element in root:
        name = _local_name(element.tag)
        if name == "Contents":
            page.keys.extend(_child_texts(element, "Key"))
        elif name == "CommonPrefixes":
            page.prefixes.extend(_child_texts(element, "Prefix"))
        elif name == "NextContinuationToken" and element.text:
            page.next_token = element.text

    return page


class ListPaginator:
    """Drives repeated listing requests, following continuation tokens.

    Pages are fetched one at a time: a page is only requested once the
    consumer has exhausted the previous one, and nothing is requested before
    iteration starts.
    """

    def __init__(self, fetch: PageFetcher):
        self._fetch = fetch

    def query(self, prefix: str, token: Optional[str] = None) -> Dict[str, str]:
        query = {
            "delimiter": DELIMITER,
            "list-type": "2",
        }
        if prefix:
            query["prefix"] = prefix
        if token is not None:
            query["continuation-token"] = token
        return query

    async def pages(self, prefix: str) -> AsyncIterator[ListingPage]:
        token: Optional[str] = None
        while True:
            body = await self._fetch(self.query(prefix, token))
            if body is None:
                return

            try:
                page = parse_listing(body)
            except xml.etree.ElementTree.ParseError as e:
                logger.warning(f"Unparsable listing for prefix '{prefix}': {str(e)}")
                return

            yield page

            if page.next_token is None:
                return
            token = page.next_token

    async def entries(self, prefix: str) -> AsyncIterator[str]:
        """Yield every entry under ``prefix`` with the prefix stripped.

        Keys and common prefixes of a page are merged in key order, so the
        sequence doesn't depend on where the pages break. The folder's own
        placeholder key comes out as an empty string, callers decide whether
        to keep it.
        """
        async for page in self.pages(prefix):
            for found in sorted(page.keys + page.prefixes):
                if prefix and found.startswith(prefix):
                    found = found[len(prefix):]
                yield found
