import ipaddress
import socket
from typing import List

from wb.bound_resolver.bound_socket import DeviceBoundSocket
from wb.bound_resolver.dial_config import DialConfig
from wb.bound_resolver.dns_query import DNSQueryClient
from wb.bound_resolver.errors import PlatformResolveError


def is_ip_address(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def platform_lookup_ip(host: str) -> List[str]:
    try:
        infos = socket.getaddrinfo(host, None)
    except (socket.gaierror, UnicodeError) as e:
        raise PlatformResolveError(host, str(e)) from e
    addresses = []
    for _family, _type, _proto, _canonname, sockaddr in infos:
        if sockaddr[0] not in addresses:
            addresses.append(sockaddr[0])
    return addresses


def bind_lookup_ip(host: str, config: DialConfig) -> List[str]:
    with DeviceBoundSocket(host, config) as conn:
        return DNSQueryClient(host, conn).resolve()


def lookup_ip(host: str, config: DialConfig) -> List[str]:
    """Resolves host to a list of IP addresses

    Without a bind to device provider in config the system resolver is used.
    Otherwise an A query is sent to config.bind_to_device_dns_server over a UDP
    socket bound to the device, so DNS traffic doesn't leave through the default
    route. An IP address given as host is returned as is.
    """

    if is_ip_address(host):
        return [host]
    if config.bind_to_device_provider is not None:
        return bind_lookup_ip(host, config)
    return platform_lookup_ip(host)
