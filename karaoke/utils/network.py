"""
Local network address discovery for the join screen.
"""

import logging
import socket

logger = logging.getLogger(__name__)


def get_local_ip():
    """Best-effort LAN IPv4 address of this machine, 'localhost' if none found"""
    # Connecting a UDP socket sends nothing; it only picks the outbound interface
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(("10.255.255.255", 1))
        ip = sock.getsockname()[0]
        if not ip.startswith("127."):
            return ip
    except OSError as e:
        logger.debug(f"Outbound interface lookup failed: {e}")
    finally:
        sock.close()

    try:
        for info in socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET):
            ip = info[4][0]
            if not ip.startswith("127."):
                return ip
    except OSError as e:
        logger.debug(f"Hostname lookup failed: {e}")

    return "localhost"
