"""Report WiFi traffic per device or per vendor from a packet capture log.

Packet files hold one packet per line with four TAB-separated fields: the
capture time, the transmitter and receiver MAC addresses, and the packet
length in bytes. An optional OUI file maps vendor prefixes to names, in
which case traffic is reported per vendor rather than per device.
"""

from __future__ import annotations

import re
import sys
import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

MAX_NUM_MAC_ADDRESSES = 500
MAX_LEN_VENDOR_NAME = 91
MAX_LEN_ADDRESS = 6
UNKNOWN_VENDOR_ADDRESS = "??:??:??"
UNKNOWN_VENDOR_NAME = "UNKNOWN-VENDOR"

BROADCAST_ADDRESS = (1 << 48) - 1
OUI_MASK = (1 << 24) - 1
VENDOR_MASK = (1 << 32) - 1

_FIELD_DELIMITERS = "\t\n"

USAGE = (
    "wifistats can be invoked in two ways:\n"
    "prompt> ./wifistats ['t' or 'r'] packetfile\n"
    "e.g. ./wifistats t sample-packets-large.txt"
    "OR\n"
    "prompt> ./wifistats ['t' or 'r'] packetfile OUIfile\n"
    "e.g. ./wifistats t sample-packets-large.txt "
    "sample-OUIfile-large.txt"
)


class WifiStatsError(Exception):
    """Raised for bad arguments, unreadable files or malformed input."""


class Requested(Enum):
    """Which side of each packet the report is about."""

    TRANSMITTERS = "t"
    RECEIVERS = "r"


@dataclass(frozen=True)
class Request:
    """The report asked for on the command line."""

    packets_filename: str
    requested: Requested
    ouis_filename: Optional[str] = None

    @property
    def ouifile_provided(self) -> bool:
        return self.ouis_filename is not None


@dataclass(frozen=True)
class Packet:
    """One line of a packet file; addresses are little-endian integers."""

    transmitter: int = 0
    receiver: int = 0
    nbytes: int = 0


@dataclass(frozen=True)
class Entry:
    """One line of the report."""

    address: int
    nbytes: int
    name: Optional[str] = None


@dataclass
class Report:
    """The report entries plus bytes from devices of unknown vendors."""

    entries: list[Entry] = field(default_factory=list)
    unknown_bytes: int = 0


def _tokens(text: str, delimiters: str) -> list[str]:
    """Split ``text`` on any of ``delimiters``, dropping empty pieces."""
    pattern = "[" + re.escape(delimiters) + "]"
    return [token for token in re.split(pattern, text) if token]


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def parse_request(argv: Sequence[str]) -> Request:
    """Build a request from ``what packets [OUIfile]``."""
    if len(argv) not in (2, 3):
        raise WifiStatsError(USAGE)
    what = argv[0][:1]
    try:
        requested = Requested(what)
    except ValueError:
        raise WifiStatsError(f"Unexpected request: {what}") from None
    ouis = argv[2] if len(argv) == 3 else None
    return Request(packets_filename=argv[1], requested=requested, ouis_filename=ouis)


def is_broadcast(address: int) -> bool:
    """True for ff:ff:ff:ff:ff:ff, the address that reaches every device."""
    return address == BROADCAST_ADDRESS


def parse_hex_byte(text: str) -> int:
    """Parse exactly two hexadecimal digits into a byte."""
    if len(text) != 2:
        raise WifiStatsError("Invalid input: String must be 2 characters long.")
    if not all(c in "0123456789abcdefABCDEF" for c in text):
        raise WifiStatsError(f"Invalid hex string: {text}")
    return int(text, 16)


def parse_address(text: str, delimiters: str) -> int:
    """Parse up to six hex bytes; the first byte is the least significant."""
    address = 0
    for position, token in enumerate(_tokens(text, delimiters)[:MAX_LEN_ADDRESS]):
        address |= parse_hex_byte(token) << (8 * position)
    return address


def parse_packet(line: str) -> Packet:
    """Parse one packet line; missing fields are left as zero."""
    tokens = _tokens(line, _FIELD_DELIMITERS)
    transmitter = parse_address(tokens[1], ":") if len(tokens) > 1 else 0
    receiver = parse_address(tokens[2], ":") if len(tokens) > 2 else 0
    nbytes = _atoi(tokens[3]) if len(tokens) > 3 else 0
    return Packet(transmitter=transmitter, receiver=receiver, nbytes=nbytes)


def parse_vendor(line: str) -> tuple[int, Optional[str]]:
    """Parse one OUI line into ``(prefix, name)``; name is None if absent."""
    tokens = _tokens(line, _FIELD_DELIMITERS)
    address = parse_address(tokens[0], ":-") & VENDOR_MASK if tokens else 0
    name = tokens[1] if len(tokens) > 1 else None
    return address, name


def _read_lines(path: str) -> list[str]:
    try:
        with open(path, encoding="utf-8", errors="replace") as stream:
            return stream.readlines()
    except OSError:
        raise WifiStatsError(f"Cannot open file '{path}'") from None


def load_vendors(path: str) -> dict[int, str]:
    """Read an OUI file into a prefix-to-name mapping; the first name wins."""
    vendors: dict[int, str] = {}
    for line in _read_lines(path):
        address, name = parse_vendor(line)
        if len(vendors) >= MAX_NUM_MAC_ADDRESSES:
            if address not in vendors:
                raise WifiStatsError("Parsing too many unique vendor address.")
            continue
        vendors.setdefault(address, (name or "")[: MAX_LEN_VENDOR_NAME - 1])
    return vendors


def collect_macs(request: Request) -> dict[int, int]:
    """Total the bytes per address, in order of first appearance.

    Packets sent to the broadcast address are ignored. With an OUI file the
    addresses are cut down to their vendor prefix.
    """
    macs: dict[int, int] = {}
    for line in _read_lines(request.packets_filename):
        packet = parse_packet(line)
        if is_broadcast(packet.receiver):
            continue
        if request.requested is Requested.TRANSMITTERS:
            address = packet.transmitter
        else:
            address = packet.receiver
        if request.ouifile_provided:
            address &= OUI_MASK
        if len(macs) >= MAX_NUM_MAC_ADDRESSES:
            if address not in macs:
                raise WifiStatsError("Parsing too many unique mac address.")
            continue
        macs[address] = macs.get(address, 0) + packet.nbytes
    return macs


def create_report(
    macs: Mapping[int, int],
    vendors: Optional[Mapping[int, str]],
    request: Request,
) -> Report:
    """Turn per-address totals into report entries."""
    report = Report()
    if not request.ouifile_provided:
        report.entries = [Entry(address, nbytes) for address, nbytes in macs.items()]
        return report
    vendors = vendors or {}
    for address, nbytes in macs.items():
        name = vendors.get(address)
        if name is None:
            report.unknown_bytes += nbytes
        else:
            report.entries.append(Entry(address, nbytes, name))
    return report


def _hex_address(address: int, length: int) -> str:
    return ":".join(f"{byte:02X}" for byte in address.to_bytes(8, "little")[:length])


def format_report(report: Report, request: Request) -> list[str]:
    """Render the report as TAB-separated lines, unsorted."""
    if not request.ouifile_provided:
        return [
            f"{_hex_address(entry.address, MAX_LEN_ADDRESS)}\t{entry.nbytes}"
            for entry in report.entries
        ]
    lines = [
        f"{_hex_address(entry.address, 3)}\t{entry.name}\t{entry.nbytes}"
        for entry in report.entries
    ]
    lines.append(f"{UNKNOWN_VENDOR_ADDRESS}\t{UNKNOWN_VENDOR_NAME}\t{report.unknown_bytes}")
    return lines


def _numeric_key(line: str, field_index: int) -> int:
    fields = line.split("\t")
    if field_index >= len(fields):
        return 0
    match = re.match(r"[ \t]*(-?\d+)", "\t".join(fields[field_index:]))
    return int(match.group(1)) if match else 0


def _dictionary_key(line: str) -> str:
    return "".join(c for c in line if (c.isascii() and c.isalnum()) or c in " \t")


def sort_report(lines: Iterable[str], request: Request) -> list[str]:
    """Order lines by byte count, largest first, then by dictionary order.

    The byte count is the second field, or the third with an OUI file; ties
    fall back to dictionary order (letters, digits and blanks only) and then
    to plain string order.
    """
    field_index = 2 if request.ouifile_provided else 1
    return sorted(
        lines,
        key=lambda line: (-_numeric_key(line, field_index), _dictionary_key(line), line),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the report and print it, followed by the CPU time used."""
    start = time.process_time()
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        request = parse_request(args)
        macs = collect_macs(request)
        vendors = load_vendors(request.ouis_filename) if request.ouis_filename else None
        report = create_report(macs, vendors, request)
    except WifiStatsError as error:
        print(error, file=sys.stderr)
        return 1
    for line in sort_report(format_report(report, request), request):
        print(line)
    print(f"Time taken: {time.process_time() - start:f} seconds")
    return 0