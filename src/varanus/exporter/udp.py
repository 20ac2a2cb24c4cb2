"""UDP exporter – sends each encoded snapshot as one datagram."""

from __future__ import annotations

import logging
import socket

from ..config import split_address
from .base import BaseExporter

logger = logging.getLogger(__name__)


class UdpExporter(BaseExporter):
    """Fire-and-forget datagram sender bound to one collector address.

    The socket is opened and connected once in the constructor, which
    raises :class:`OSError` or :class:`ValueError` if the address cannot be
    parsed or resolved. Send errors after that are dropped.
    """

    def __init__(self, address: str) -> None:
        host, port = split_address(address)
        family, socktype, proto, _, sockaddr = socket.getaddrinfo(
            host, port, type=socket.SOCK_DGRAM
        )[0]
        self._sock = socket.socket(family, socktype, proto)
        try:
            self._sock.connect(sockaddr)
        except OSError:
            self._sock.close()
            raise
        self._address = address
        logger.info("UdpExporter initialized → %s", address)

    def export(self, payload: bytes) -> None:
        try:
            self._sock.send(payload)
        except OSError as exc:
            logger.debug("Dropped datagram to %s: %s", self._address, exc)

    def shutdown(self) -> None:
        self._sock.close()
        logger.info("UdpExporter shut down")
