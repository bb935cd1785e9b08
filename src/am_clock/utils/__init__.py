"""Shared helpers."""

from .crc import CRC8_TABLE, crc8
