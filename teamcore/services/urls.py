# teamcore/services/urls.py
"""
Derived team URLs. Pure functions: all process configuration comes in as arguments.
"""
from typing import Callable, Optional
from urllib.parse import urlsplit, urlunsplit

from teamcore.core.domains import strip_subdomain
from teamcore.services.avatars import generate_avatar_url


def team_url(
    domain: Optional[str],
    subdomain: Optional[str],
    base_url: str,
    subdomains_enabled: bool,
) -> str:
    """
    Public URL of a team. A custom domain wins over a subdomain; a subdomain is only
    used when multi-tenant subdomains are enabled; otherwise the bare base URL.
    """
    if domain:
        return f"https://{domain}"
    if not subdomain or not subdomains_enabled:
        return base_url

    parts = urlsplit(base_url)
    host = f"{subdomain}.{strip_subdomain(parts.hostname or '')}"
    if parts.port:
        host = f"{host}:{parts.port}"
    path = parts.path or "/"
    url = urlunsplit((parts.scheme, host, path, parts.query, parts.fragment))
    return url[:-1] if url.endswith("/") else url


def team_logo_url(team, generate: Callable[[str, str], str] = generate_avatar_url) -> str:
    return team.avatar_url or generate(team.id, team.name)
