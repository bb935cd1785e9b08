"""Protocol layer: command IDs and the set-time packet."""

from .commands import REPORT_ID, Command
from .packet import PACKET_SIZE, TimePacket, build_packet, parse_packet, to_12_hour
