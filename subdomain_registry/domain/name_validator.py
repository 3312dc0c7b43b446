"""Subdomain name and record target rules.

Pure functions only: no store or network access, safe to call on every
keystroke-driven availability check.
"""

import ipaddress
import re
from dataclasses import dataclass
from enum import Enum

from subdomain_registry.domain.entities.subdomain import RecordType

MAX_LABEL_LENGTH = 63
MAX_HOSTNAME_LENGTH = 253

SUBDOMAIN_NAME_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
_HOSTNAME_LABEL_PATTERN = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$")

# Reserved administrative, infrastructure and protocol labels.
BLOCKED_SUBDOMAINS: frozenset[str] = frozenset({
    "admin", "api", "cdn", "ns1", "ns2", "mail", "ftp", "cpanel",
    "webmail", "webdisk", "server", "localhost", "www", "root",
    "test", "staging", "dev", "development", "prod", "production",
    "backup", "database", "db", "mysql", "postgres", "redis", "cache",
    "ssl", "secure", "private", "internal", "intranet", "vpn", "ssh",
    "sftp", "git", "svn", "support", "help", "status", "monitor",
    "log", "logs", "auth", "oauth", "sso", "ldap", "ad", "dns", "mx",
    "smtp", "pop", "imap", "webdav", "caldav", "carddav",
})


class NameRejection(str, Enum):
    BLOCKED = "BLOCKED"
    INVALID_FORMAT = "INVALID_FORMAT"


@dataclass(frozen=True)
class NameCheck:
    """Outcome of validating a candidate name; ``name`` is the normalized form."""

    name: str
    rejection: NameRejection | None = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


def normalize_name(candidate: str) -> str:
    """Lower-case and trim a candidate subdomain label."""
    return candidate.strip().lower()


def is_blocked(name: str) -> bool:
    return normalize_name(name) in BLOCKED_SUBDOMAINS


def is_valid_format(name: str) -> bool:
    """Check label syntax only: 1-63 chars of [a-z0-9-], alphanumeric at both ends."""
    return (
        0 < len(name) <= MAX_LABEL_LENGTH
        and SUBDOMAIN_NAME_PATTERN.match(name) is not None
    )


def validate_subdomain_name(candidate: str) -> NameCheck:
    """Normalize a candidate, then apply the blocklist and the syntax rule."""
    name = normalize_name(candidate)
    if name in BLOCKED_SUBDOMAINS:
        return NameCheck(name, NameRejection.BLOCKED)
    if not is_valid_format(name):
        return NameCheck(name, NameRejection.INVALID_FORMAT)
    return NameCheck(name)


def validate_record_target(record_type: RecordType, target: str) -> str | None:
    """Return an error message if ``target`` does not fit ``record_type``, else None."""
    if record_type is RecordType.A:
        try:
            ipaddress.IPv4Address(target)
        except ValueError:
            return "Target must be a valid IPv4 address for an A record"
        return None

    if record_type is RecordType.AAAA:
        try:
            ipaddress.IPv6Address(target)
        except ValueError:
            return "Target must be a valid IPv6 address for an AAAA record"
        return None

    hostname = target.rstrip(".")
    labels = hostname.split(".")
    if (
        not hostname
        or len(hostname) > MAX_HOSTNAME_LENGTH
        or not all(_HOSTNAME_LABEL_PATTERN.match(label) for label in labels)
    ):
        return "Target must be a valid hostname for a CNAME record"
    return None
