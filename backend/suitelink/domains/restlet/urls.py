"""URL helpers for RESTlet deployment URLs.

A deployment URL already carries a query string
(``.../restlet.nl?script=123&deploy=1``); action parameters are appended to it.
"""

from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlencode, urlsplit


def split_url(url: str) -> Tuple[str, Dict[str, str]]:
    """Split a URL into its base (no query, no fragment) and query parameters.

    Blank values are kept; for repeated keys the last value wins.
    """
    base, _, rest = url.partition("?")
    query = rest.partition("#")[0]
    return base, dict(parse_qsl(query, keep_blank_values=True))


def with_query(url: str, params: Optional[Mapping[str, str]]) -> str:
    """Append `params` to `url`, keeping any query string already present.

    Values are percent-encoded with %20 for spaces, matching the encoding
    used when the request is signed.
    """
    if not params:
        return url
    encoded = urlencode(params, quote_via=quote)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{encoded}"


def parse_script_deploy(url: Optional[str]) -> Dict[str, str]:
    """Extract the ``script`` and ``deploy`` ids from a RESTlet URL.

    Returns an empty dict for a missing or unparseable URL.
    """
    if not url:
        return {}
    try:
        query = urlsplit(url).query
    except ValueError:
        return {}
    params = dict(parse_qsl(query))
    return {key: params[key] for key in ("script", "deploy") if params.get(key)}
