"""Connection options for the directory and the stored naming contexts."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from alteredstate.app_config import AppConfig

PathLike = Union[str, Path]

DEFAULT_LDAP_PORT = 389
DEFAULT_LDAP_FILTER = "(objectClass=*)"


@dataclass
class LdapOptions:
    """How to reach and query the directory server."""

    domain: str = "example.com"
    ldapfqdn: str = "ldap.example.com"
    ip: Optional[str] = "127.0.0.1"
    port: Optional[int] = DEFAULT_LDAP_PORT
    ldaps: bool = False
    ldap_filter: Optional[str] = DEFAULT_LDAP_FILTER
    username: Optional[str] = None
    password: Optional[str] = None
    kerberos: bool = True

    @classmethod
    def for_config(cls, config: "AppConfig", debug_mode: bool = False) -> "LdapOptions":
        """Options for the configured domain; debug mode uses simple bind credentials."""
        if debug_mode:
            password = "password"
            return cls(
                domain=config.domain,
                ldapfqdn=config.hostname,
                ip=config.hostname,
                port=DEFAULT_LDAP_PORT,
                ldaps=False,
                ldap_filter=DEFAULT_LDAP_FILTER,
                username="administrator",
                password=password,
                kerberos=False,
            )
        return cls(
            domain=config.domain,
            ldapfqdn=config.hostname,
            ip="127.0.0.1",
            port=DEFAULT_LDAP_PORT,
            ldaps=False,
            ldap_filter=DEFAULT_LDAP_FILTER,
            username=None,
            password=None,
            kerberos=True,
        )


def generate_ldap_options_from_config(config: "AppConfig") -> LdapOptions:
    """Options that target the configured host directly over plain LDAP."""
    return LdapOptions(
        domain=config.domain,
        ldapfqdn=config.hostname,
        ip=config.hostname,
        port=DEFAULT_LDAP_PORT,
        ldaps=False,
        ldap_filter=DEFAULT_LDAP_FILTER,
        kerberos=True,
    )


@dataclass
class LdapNamingContexts:
    """Naming contexts advertised by the domain controller."""

    naming_contexts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"naming_contexts": list(self.naming_contexts)}

    @classmethod
    def _from_dict(cls, data: Any) -> "LdapNamingContexts":
        if not isinstance(data, dict):
            raise ValueError("naming contexts must be a JSON object")
        contexts = data.get("naming_contexts", [])
        if not isinstance(contexts, list) or not all(
            isinstance(item, str) for item in contexts
        ):
            raise ValueError("field `naming_contexts` must be a list of strings")
        return cls(naming_contexts=list(contexts))

    @classmethod
    def load_from_file(cls, path: PathLike) -> "LdapNamingContexts":
        """Read the file, creating it empty when it does not exist."""
        path = Path(path)
        if not path.exists():
            contexts = cls()
            contexts.save_to_file(path)
            return contexts
        with path.open(encoding="utf-8") as handle:
            return cls._from_dict(json.load(handle))

    def save_to_file(self, path: PathLike) -> None:
        with Path(path).open("w", encoding="utf-8") as handle:
            json.dump(self.to_dict(), handle, separators=(",", ":"))