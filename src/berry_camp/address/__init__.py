"""Catalog addresses and the teleport query format."""

from .models import Location, ParsedAddress
from .codec import (
    AddressCodec,
    encode_teleport_query,
    format_address,
    format_coordinate,
    parse_address,
    teleport_prefix,
)

__all__ = [
    "AddressCodec",
    "Location",
    "ParsedAddress",
    "encode_teleport_query",
    "format_address",
    "format_coordinate",
    "parse_address",
    "teleport_prefix",
]
