# teamcore/core/domains.py
"""
Subdomain rules and hostname helpers.

Kept free of settings imports so settings can use RESERVED_SUBDOMAINS as a default.
"""
import re
from typing import Iterable, Optional

from teamcore.core.exceptions import ValidationError

SUBDOMAIN_MIN_LENGTH = 4
SUBDOMAIN_MAX_LENGTH = 32

RESERVED_SUBDOMAINS = [
    "about", "account", "add", "admin", "advertising", "ads", "api", "app",
    "assets", "archive", "beta", "billing", "blog", "cache", "cdn", "code",
    "community", "dashboard", "developer", "developers", "forum", "help",
    "home", "http", "https", "imap", "localhost", "mail", "marketing",
    "mobile", "multiple", "new", "news", "newsletter", "ns1", "ns2", "ns3",
    "ns4", "password", "profile", "realtime", "sandbox", "script", "scripts",
    "setup", "signin", "signup", "site", "smtp", "support", "status", "static",
    "stats", "test", "update", "updates", "ws", "wss", "web", "websockets",
    "www", "www1", "www2", "www3", "www4",
]

MSG_LOWERCASE = "Must be lowercase"
MSG_CHARSET = "Must be only alphanumeric and dashes"
MSG_LENGTH = "Must be between 4 and 32 characters"
MSG_RESERVED = "You chose a restricted word, please try another."

_SUBDOMAIN_RE = re.compile(r"^[a-z\d-]+$", re.IGNORECASE)

_SECOND_LEVEL_SUFFIXES = {"ac", "co", "com", "edu", "gov", "net", "org"}


def subdomain_violation(value: str, reserved: Optional[Iterable[str]] = None) -> Optional[str]:
    """
    Return the message of the first rule `value` breaks, or None if it is valid.
    Rules are checked in a fixed order: case, charset, length, reserved words.
    """
    reserved = RESERVED_SUBDOMAINS if reserved is None else reserved
    if value != value.lower():
        return MSG_LOWERCASE
    if not _SUBDOMAIN_RE.fullmatch(value):
        return MSG_CHARSET
    if not SUBDOMAIN_MIN_LENGTH <= len(value) <= SUBDOMAIN_MAX_LENGTH:
        return MSG_LENGTH
    if value in reserved:
        return MSG_RESERVED
    return None


def validate_subdomain(value: str, reserved: Optional[Iterable[str]] = None) -> str:
    message = subdomain_violation(value, reserved)
    if message:
        raise ValidationError(message)
    return value


def is_repairable_by_suffix(value: str, reserved: Optional[Iterable[str]] = None) -> bool:
    """
    True if appending digits to `value` can ever produce a valid subdomain.
    Case and charset errors never go away, and an over-long value only grows.
    """
    message = subdomain_violation(value, reserved)
    if message in (MSG_LOWERCASE, MSG_CHARSET):
        return False
    if message == MSG_LENGTH and len(value) > SUBDOMAIN_MAX_LENGTH:
        return False
    return True


def strip_subdomain(hostname: str) -> str:
    """
    app.example.com -> example.com, app.example.co.uk -> example.co.uk,
    localhost -> localhost.
    """
    parts = hostname.split(".")
    if len(parts) <= 2:
        return hostname
    # two-part public suffixes like co.uk, com.au
    if len(parts[-1]) == 2 and parts[-2] in _SECOND_LEVEL_SUFFIXES:
        return ".".join(parts[-3:])
    return ".".join(parts[-2:])
