import logging
import socket

from wb.bound_resolver.bind_to_device_interfaces import IBindToDeviceProvider


class InterfaceBindToDeviceProvider(IBindToDeviceProvider):  # pylint: disable=R0903
    def __init__(self, iface: str):
        self.iface = iface

    def bind_to_device(self, socket_fd: int) -> bool:
        sock = socket.socket(fileno=socket_fd)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BINDTODEVICE, self.iface.encode() + b"\0")
        except OSError as ex:
            logging.debug("Binding socket %d to %s failed: %s", socket_fd, self.iface, ex)
            return False
        finally:
            sock.detach()
        logging.debug("Socket %d bound to %s", socket_fd, self.iface)
        return True
