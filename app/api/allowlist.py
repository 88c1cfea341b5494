from typing import Iterable
from urllib.parse import urlparse


def is_allowed_source(url: str, allowed_domains: Iterable[str]) -> bool:
    """
    True if the URL's host is one of `allowed_domains` or a subdomain of one.
    "youtube.com" admits "www.youtube.com" and "m.youtube.com", not "notyoutube.com".
    """
    try:
        host = (urlparse(url).hostname or "").lower().rstrip(".")
    except ValueError:
        return False
    if not host:
        return False
    return any(host == domain or host.endswith("." + domain) for domain in allowed_domains)
