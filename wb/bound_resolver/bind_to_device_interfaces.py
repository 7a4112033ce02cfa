from abc import ABC, abstractmethod


class IBindToDeviceProvider(ABC):
    @abstractmethod
    def bind_to_device(self, socket_fd: int):
        """Forces all traffic of the socket through a specific network interface

        :param socket_fd: raw descriptor of a socket that is not connected yet
        :type socket_fd: int
        :returns: False if binding failed, any other value otherwise
        """
