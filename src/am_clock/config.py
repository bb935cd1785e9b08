"""Run-time settings for a single sync."""

from __future__ import annotations

from dataclasses import dataclass

# Angry Miao Cyberboard, as reported by the USB CDC interface
VENDOR_ID = 0x05AC
PRODUCT_ID = 0x0256
BAUD_RATE = 9600
TIMEOUT = 0.5  # seconds, used for both reads and writes


@dataclass
class SyncConfig:
    """Options controlling one clock sync.

    Built from command-line arguments and passed down explicitly.
    """

    use_12hour_display: bool = False
    vendor_id: int = VENDOR_ID
    product_id: int = PRODUCT_ID
    baudrate: int = BAUD_RATE
    timeout: float = TIMEOUT
