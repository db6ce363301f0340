"""Directory entry model and helpers for building LDAP URLs and naming contexts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

LDAPS_PORT = 636
CONFIGURATION_PREFIX = "CN=Configuration,"
SCHEMA_OBJECT_CLASSES = frozenset({"attributeSchema", "classSchema"})


class EntryType(Enum):
    """Broad classification of a directory entry."""

    UNKNOWN = "unknown"
    SCHEMA_ENTRY = "schema_entry"


@dataclass
class LdapSearchEntry:
    """One entry returned by a directory search."""

    dn: str
    attrs: dict[str, list[str]] = field(default_factory=dict)
    bin_attrs: dict[str, list[bytes]] = field(default_factory=dict)


def prepare_ldap_url(
    ldaps: bool, ip: Optional[str], port: Optional[int], domain: str
) -> str:
    """Build the server URL; port 636 implies LDAPS, and ``ip`` wins over ``domain``."""
    protocol = "ldaps" if ldaps or port == LDAPS_PORT else "ldap"
    target = ip if ip is not None else domain
    if port is None:
        return f"{protocol}://{target}"
    return f"{protocol}://{target}:{port}"


def domain_to_dc(domain: str) -> str:
    """Turn a dotted domain name into a chain of DC components."""
    return ",".join(f"DC={part}" for part in domain.split("."))


def prepare_ldap_dc(domain: str) -> list[str]:
    """The domain naming context followed by the configuration context.

    The configuration context is only completed for single-label domains;
    for dotted domains it carries the bare prefix.
    """
    single_label_dc = ""
    if "." not in domain:
        single_label_dc = f"DC={domain}"
        naming_contexts = [single_label_dc]
    else:
        naming_contexts = [domain_to_dc(domain)]
    naming_contexts.append(CONFIGURATION_PREFIX + single_label_dc)
    return naming_contexts


def get_type(entry: LdapSearchEntry) -> EntryType:
    """Classify an entry by its objectClass values."""
    object_classes = entry.attrs.get("objectClass")
    if object_classes and any(value in SCHEMA_OBJECT_CLASSES for value in object_classes):
        return EntryType.SCHEMA_ENTRY
    return EntryType.UNKNOWN