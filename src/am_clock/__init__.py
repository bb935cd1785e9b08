"""Set the clock of an Angry Miao Cyberboard over its USB serial port."""

__version__ = "0.1.0"

from .config import SyncConfig
from .exceptions import *  # noqa: F401,F403
from .protocol.packet import build_packet, parse_packet
from .session import SessionResult, SessionState, sync_time
from .transport.serial_connection import SerialConnection, find_device
from .utils.crc import crc8
