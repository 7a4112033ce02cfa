class DomainNameResolveException(Exception):
    def __init__(self, host: str = "", message: str = ""):
        super().__init__(f"Error during {host} resolving: {message}")
        self.host = host


class SocketCreateError(DomainNameResolveException):
    pass


class InvalidResolverAddressError(DomainNameResolveException):
    pass


class ConnectError(DomainNameResolveException):
    pass


class QueryWriteError(DomainNameResolveException):
    pass


class QueryReadError(DomainNameResolveException):
    pass


class MalformedResponseError(DomainNameResolveException):
    pass


class PlatformResolveError(DomainNameResolveException):
    pass
