"""Subnet mask helpers for NIC customization."""

from __future__ import annotations

import re

from .errors import InputError

MAX_PREFIX_LENGTH = 32
DECIMAL_PATTERN = re.compile(r"[+-]?[0-9]+")


def prefix_to_netmask(prefix_length: int) -> str:
    """Convert a CIDR prefix length (0-32) into a dotted-decimal mask, e.g. 24 -> 255.255.255.0."""
    if isinstance(prefix_length, bool) or not isinstance(prefix_length, int):
        raise InputError(f"Prefix length must be an integer, got {prefix_length!r}")
    if prefix_length < 0 or prefix_length > MAX_PREFIX_LENGTH:
        raise InputError(
            f"Prefix length must be between 0 and {MAX_PREFIX_LENGTH}, got {prefix_length}"
        )

    bits = "1" * prefix_length + "0" * (MAX_PREFIX_LENGTH - prefix_length)
    octets = [str(int(bits[i : i + 8], 2)) for i in range(0, MAX_PREFIX_LENGTH, 8)]
    return ".".join(octets)


def normalize_netmask(value) -> str:
    """
    Return a dotted-decimal netmask.

    Values already containing a "." pass through untouched; anything else is
    read as an ASCII decimal prefix length.
    """
    if isinstance(value, str) and "." in value:
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return prefix_to_netmask(value)
    if not isinstance(value, str) or not DECIMAL_PATTERN.fullmatch(value.strip()):
        raise InputError(f"Cannot parse netmask {value!r}: expected a decimal prefix length")
    return prefix_to_netmask(int(value.strip()))
