import logging
from typing import List

import dns.exception
import dns.flags
import dns.message
import dns.name
import dns.rdataclass
import dns.rdatatype

from wb.bound_resolver.errors import (
    MalformedResponseError,
    QueryReadError,
    QueryWriteError,
)


def make_query(host: str) -> dns.message.Message:
    query = dns.message.make_query(dns.name.from_text(host), dns.rdatatype.A)
    query.flags |= dns.flags.RD
    return query


def get_addresses(response: dns.message.Message) -> List[str]:
    addresses = []
    for rrset in response.answer:
        if rrset.rdtype != dns.rdatatype.A or rrset.rdclass != dns.rdataclass.IN:
            continue
        for rdata in rrset:
            addresses.append(rdata.address)
    return addresses


class DNSQueryClient:
    """Single A query/response exchange over a connected transport

    conn must provide write(data) and read() and raise OSError
    (socket.timeout included) when the exchange fails.
    """

    def __init__(self, host: str, conn):
        self.host = host
        self.conn = conn

    def send_query(self) -> None:
        try:
            wire = make_query(self.host).to_wire()
        except dns.exception.DNSException as e:
            raise QueryWriteError(self.host, str(e)) from e
        try:
            self.conn.write(wire)
        except OSError as e:
            raise QueryWriteError(self.host, str(e)) from e
        logging.debug("Query for %s sent", self.host)

    def receive_response(self) -> dns.message.Message:
        try:
            wire = self.conn.read()
        except OSError as e:
            raise QueryReadError(self.host, str(e)) from e
        try:
            return dns.message.from_wire(wire, one_rr_per_rrset=True)
        except (dns.exception.DNSException, ValueError) as e:
            raise MalformedResponseError(self.host, f"bad response ({len(wire)} bytes): {e}") from e

    def resolve(self) -> List[str]:
        self.send_query()
        response = self.receive_response()
        addresses = get_addresses(response)
        logging.debug("%s resolves to %s", self.host, addresses)
        return addresses
