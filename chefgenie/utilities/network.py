"""Network helper used by ``chefgenie.main`` to print a LAN URL on startup."""
import socket

LOOPBACK = "127.0.0.1"


def get_local_ip(probe_host: str = "8.8.8.8") -> str:
    """Return the LAN address the OS would use to reach ``probe_host``, or 127.0.0.1.

    Connecting a UDP socket only selects a route; nothing is sent on the wire.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect((probe_host, 80))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = LOOPBACK
    finally:
        s.close()
    return ip
