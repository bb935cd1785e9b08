"""Transport layer: serial port discovery and I/O."""

from .serial_connection import SerialConnection, find_device, list_matching_ports, open_port
