"""Report and command identifiers understood by the keyboard firmware.

Every host-to-device packet starts with a report ID followed by a single
command byte. Only the set-time command is used by this tool.
"""

from __future__ import annotations

from enum import IntEnum

REPORT_ID = 0x01


class Command(IntEnum):
    """Command identifiers."""

    SET_TIME = 0x03
