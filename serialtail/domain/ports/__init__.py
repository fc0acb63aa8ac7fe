"""Domain ports - interfaces for infrastructure to implement."""

from .transport_port import SerialTransportPort, TransportFactory

__all__ = [
    "SerialTransportPort",
    "TransportFactory",
]
