import datetime
import json
from typing import Dict, Optional

from wb.bound_resolver.bind_to_device import InterfaceBindToDeviceProvider
from wb.bound_resolver.bind_to_device_interfaces import IBindToDeviceProvider

CONFIG_FILE = "/etc/wb-bound-resolver.conf"
DEFAULT_CONNECT_TIMEOUT = datetime.timedelta(seconds=0)


class ImproperlyConfigured(ValueError):
    pass


class DialConfig:  # pylint: disable=R0903
    def __init__(
        self,
        bind_to_device_provider: Optional[IBindToDeviceProvider] = None,
        bind_to_device_dns_server: str = "",
        connect_timeout: datetime.timedelta = DEFAULT_CONNECT_TIMEOUT,
    ) -> None:
        self.bind_to_device_provider = bind_to_device_provider
        self.bind_to_device_dns_server = bind_to_device_dns_server
        self.connect_timeout = connect_timeout


class DialConfigFile:
    def __init__(self) -> None:
        self.debug = False
        self.iface: Optional[str] = None
        self.dns_server = ""
        self.connect_timeout = DEFAULT_CONNECT_TIMEOUT

    def load_config(self, cfg: Dict):
        self.debug = cfg.get("debug", False)
        self.iface = self.get_iface(cfg)
        self.dns_server = self.get_dns_server(cfg, self.iface)
        self.connect_timeout = self.get_connect_timeout(cfg)

    @staticmethod
    def get_iface(cfg: Dict) -> Optional[str]:
        value = cfg.get("bind_to_device")
        if value is None:
            return None
        if not isinstance(value, str) or not value:
            raise ImproperlyConfigured(f"Bad bind_to_device interface {value!r}")
        return value

    @staticmethod
    def get_dns_server(cfg: Dict, iface: Optional[str]) -> str:
        # Address itself is checked when resolving
        value = cfg.get("dns_server", "")
        if not isinstance(value, str):
            raise ImproperlyConfigured(f"Bad dns_server {value!r}")
        if iface is not None and not value:
            raise ImproperlyConfigured(f"dns_server is required to resolve via {iface}")
        return value

    @staticmethod
    def get_connect_timeout(cfg: Dict) -> datetime.timedelta:
        seconds = cfg.get("connect_timeout_s")
        if seconds is None:
            return DEFAULT_CONNECT_TIMEOUT
        try:
            value = datetime.timedelta(seconds=float(seconds))
        except Exception as e:
            raise ImproperlyConfigured(f"Incorrect connect_timeout_s ({seconds}): {e}") from e
        if value < datetime.timedelta(0):
            raise ImproperlyConfigured(f"Negative connect_timeout_s ({seconds})")
        return value

    def get_dial_config(self) -> DialConfig:
        provider = None
        if self.iface is not None:
            provider = InterfaceBindToDeviceProvider(self.iface)
        return DialConfig(
            bind_to_device_provider=provider,
            bind_to_device_dns_server=self.dns_server,
            connect_timeout=self.connect_timeout,
        )


def read_config_json(file_name: str = CONFIG_FILE) -> Dict:
    with open(file_name, "r", encoding="utf-8") as file:
        return json.load(file)
