import datetime
import ipaddress
import logging
import socket
import time
from typing import Optional

from wb.bound_resolver.errors import (
    ConnectError,
    InvalidResolverAddressError,
    SocketCreateError,
)

DNS_PORT = 53
MAX_DATAGRAM_SIZE = 65535

socket_factory = socket.socket


def parse_resolver_address(host: str, address: str) -> str:
    # TODO: IPv6 resolvers need an AF_INET6 socket as well
    try:
        return str(ipaddress.IPv4Address(address))
    except ValueError as e:
        raise InvalidResolverAddressError(host, f"invalid IP address {address!r}") from e


class BoundConnection:
    """Datagram connection with absolute read and write deadlines

    Deadlines are points on the monotonic clock. Every read or write waits only
    for the time left until its deadline and raises socket.timeout once it
    has passed.
    """

    def __init__(self, sock: socket.socket):
        self._sock = sock
        self.read_deadline: Optional[float] = None
        self.write_deadline: Optional[float] = None

    def set_deadline(self, timeout: datetime.timedelta) -> None:
        deadline = time.monotonic() + timeout.total_seconds()
        self.read_deadline = deadline
        self.write_deadline = deadline

    def _apply_deadline(self, deadline: Optional[float]) -> None:
        if deadline is None:
            self._sock.settimeout(None)
            return
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise socket.timeout("i/o deadline exceeded")
        self._sock.settimeout(remaining)

    def write(self, data: bytes) -> int:
        self._apply_deadline(self.write_deadline)
        return self._sock.send(data)

    def read(self, size: int = MAX_DATAGRAM_SIZE) -> bytes:
        self._apply_deadline(self.read_deadline)
        return self._sock.recv(size)


class DeviceBoundSocket:
    """UDP socket bound to a device and connected to the configured DNS server

    Used as a context manager: entering it yields a BoundConnection, leaving it
    closes the socket whatever happened in between.
    """

    def __init__(self, host: str, config):
        self.host = host
        self.config = config
        self._sock = None

    def __enter__(self) -> BoundConnection:
        try:
            return self.open()
        except BaseException:
            self.close()
            raise

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def open(self) -> BoundConnection:
        try:
            self._sock = socket_factory(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as e:
            raise SocketCreateError(self.host, str(e)) from e
        logging.debug("Socket %s created for %s resolving", self._sock.fileno(), self.host)

        self._bind_to_device()

        address = parse_resolver_address(self.host, self.config.bind_to_device_dns_server)
        # connect() on a datagram socket only sets the default peer, so no timeout here
        try:
            self._sock.connect((address, DNS_PORT))
        except OSError as e:
            raise ConnectError(self.host, str(e)) from e
        logging.debug("Resolving %s via %s:%d", self.host, address, DNS_PORT)

        conn = BoundConnection(self._sock)
        if self.config.connect_timeout:
            conn.set_deadline(self.config.connect_timeout)
        return conn

    def _bind_to_device(self) -> None:
        # The outcome never aborts resolving, a failed bind leaves the query unbound
        logging.debug("Binding socket %s for %s resolving", self._sock.fileno(), self.host)
        try:
            res = self.config.bind_to_device_provider.bind_to_device(self._sock.fileno())
        except OSError as ex:
            logging.warning("Unable to bind socket for %s resolving, sending query unbound: %s", self.host, ex)
            return
        if res is False:
            logging.warning("Unable to bind socket for %s resolving, sending query unbound", self.host)

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None
