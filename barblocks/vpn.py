"""VPN connection status shared by the VPN drivers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .state import State

DEFAULT_FORMAT = " VPN: $icon "
DEFAULT_INTERVAL = 10

_REGIONAL_A = 0x1F1E6


class DriverType(Enum):
    """Which VPN command-line client to use."""

    NORDVPN = "nordvpn"
    MULLVAD = "mullvad"


class Connection(Enum):
    """Whether the VPN is up."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"


_ICONS = {
    Connection.CONNECTED: "net_vpn",
    Connection.DISCONNECTED: "net_wired",
    Connection.ERROR: "net_down",
}


def _country_flag(code):
    code = code.upper()
    if len(code) != 2 or not (code.isascii() and code.isalpha()):
        return ""
    return "".join(chr(_REGIONAL_A + ord(letter) - ord("A")) for letter in code)


@dataclass(frozen=True)
class VpnStatus:
    """The reported state of the VPN connection."""

    connection: Connection
    country: str = ""
    country_flag: str = ""

    @classmethod
    def connected(cls, country="", country_code=None):
        """A connected status; the flag is built from the two-letter country code."""
        flag = _country_flag(country_code) if country_code else ""
        return cls(Connection.CONNECTED, country, flag)

    def icon(self):
        """Name of the icon for this status."""
        return _ICONS[self.connection]


DISCONNECTED = VpnStatus(Connection.DISCONNECTED)
ERROR = VpnStatus(Connection.ERROR)


def status_state(status, state_connected=State.INFO, state_disconnected=State.IDLE):
    """Widget state for a status; errors are always critical."""
    if status.connection is Connection.CONNECTED:
        return state_connected
    if status.connection is Connection.DISCONNECTED:
        return state_disconnected
    return State.CRITICAL