"""Wi-Fi credential records and the ``WIFI:`` payload builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

NOPASS = "nopass"

# Backslash must stay first so later replacements are not escaped twice.
_ESCAPES: Tuple[Tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    (";", "\\;"),
    (":", "\\:"),
)


class CredentialError(ValueError):
    """Raised when a credential record cannot be formatted."""


class IncompatibleAuthPassword(CredentialError):
    def __init__(self) -> None:
        super().__init__(
            "nopass (or an unset authentication type) cannot be paired with a "
            "non-empty password; use an authentication type such as WPA2"
        )


class MissingRequiredPassword(CredentialError):
    def __init__(self, auth: str) -> None:
        super().__init__(f"authentication type {auth} requires a password")
        self.auth = auth


def escape(field: str) -> str:
    """Backslash-escape ``\\``, ``"``, ``;`` and ``:`` in ``field``."""
    for find, replace in _ESCAPES:
        field = field.replace(find, replace)
    return field


def normalize_auth(token: str) -> str:
    """Return the ``T:`` tag for ``token``.

    Scanners on some platforms reject lower-case tags, so everything except
    ``nopass`` is upper-cased. ``nopass`` is accepted in any case and is
    returned as given; an empty token means ``nopass``.
    """
    if not token:
        return NOPASS
    if _is_nopass(token):
        return token
    return token.upper()


def _is_nopass(token: str) -> bool:
    return not token or token.lower() == NOPASS


@dataclass(frozen=True)
class CredentialRecord:
    ssid: str
    password: str = ""
    auth: str = ""
    hidden: bool = False
    quote: bool = False

    def format(self) -> str:
        """Validate the record and return its ``WIFI:`` payload.

        Raises:
            IncompatibleAuthPassword: ``auth`` is nopass/empty but a password is set.
            MissingRequiredPassword: ``auth`` needs a password but none is set.
        """
        auth = normalize_auth(self.auth)
        if _is_nopass(auth) and self.password:
            raise IncompatibleAuthPassword()
        if not self.password and not _is_nopass(auth):
            raise MissingRequiredPassword(auth)

        ssid = self._field(self.ssid)
        if not self.password:
            if self.hidden:
                return f"WIFI:T:{NOPASS};S:{ssid};H:true;;"
            return f"WIFI:T:{NOPASS};S:{ssid};;"

        password = self._field(self.password)
        tag = escape(auth)
        if self.hidden:
            return f"WIFI:T:{tag};S:{ssid};P:{password};H:true;;"
        return f"WIFI:T:{tag};S:{ssid};P:{password};;"

    def _field(self, value: str) -> str:
        escaped = escape(value)
        # Values that needed escaping are never quoted.
        if self.quote and escaped == value:
            return f'"{escaped}"'
        return escaped


def build_wifi_payload(
    ssid: str,
    password: str = "",
    auth: str = "WPA2",
    hidden: bool = False,
    quote: bool = False,
) -> str:
    """Return the Wi-Fi QR payload string."""
    record = CredentialRecord(ssid=ssid, password=password, auth=auth, hidden=hidden, quote=quote)
    return record.format()
