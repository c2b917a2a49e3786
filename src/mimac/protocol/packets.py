"""Packet catalog and coil identifiers.

The catalog maps every packet type to its wire structure and byte size.
Sizes drive transmission energy costing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class PacketType(Enum):
    """Link-layer packet types used by MI-MAC and CSMA/CA."""

    REV = auto()  # Per-coil discovery
    ACK = auto()
    DATA = auto()
    RTS = auto()
    CTS = auto()

    @property
    def label(self) -> str:
        """Human-readable packet name."""
        labels = {
            PacketType.REV: "REV",
            PacketType.ACK: "ACK",
            PacketType.DATA: "DATA",
            PacketType.RTS: "RTS",
            PacketType.CTS: "CTS",
        }
        return labels[self]


class Coil(Enum):
    """Orthogonal magnetic-induction transducer axes."""

    X = auto()
    Y = auto()
    Z = auto()

    @classmethod
    def from_name(cls, name: str) -> "Coil":
        """Get coil from name string.

        Raises:
            ValueError: If name is not a valid coil.
        """
        name_upper = name.upper()
        for coil in cls:
            if coil.name == name_upper:
                return coil
        raise ValueError(f"Unknown coil: {name}")

    @property
    def label(self) -> str:
        """Axis letter."""
        labels = {Coil.X: "X", Coil.Y: "Y", Coil.Z: "Z"}
        return labels[self]


@dataclass(frozen=True)
class PacketSpec:
    """Wire-structure description of a packet type.

    Attributes:
        fields: Ordered field names as they appear on the wire.
        min_bytes: Smallest packet size in bytes.
        max_bytes: Largest packet size in bytes.
    """

    fields: tuple[str, ...]
    min_bytes: int
    max_bytes: int

    @property
    def is_fixed(self) -> bool:
        """Whether the packet has a single fixed size."""
        return self.min_bytes == self.max_bytes

    @property
    def structure(self) -> str:
        """Structure string, e.g. ``[Carrier|PacketID|Data|EOF] (3-19 bytes)``."""
        size = f"{self.min_bytes}" if self.is_fixed else f"{self.min_bytes}-{self.max_bytes}"
        return f"[{'|'.join(self.fields)}] ({size} bytes)"


_PACKET_SPECS: dict[PacketType, PacketSpec] = {
    PacketType.REV: PacketSpec(
        fields=("Carrier", "Preamble", "TargetID", "PacketID", "TxCoilID", "EOF"),
        min_bytes=13,
        max_bytes=13,
    ),
    PacketType.ACK: PacketSpec(
        fields=("Carrier", "PacketID", "TxCoilID", "RxCoilID", "EOF"),
        min_bytes=5,
        max_bytes=5,
    ),
    PacketType.DATA: PacketSpec(
        fields=("Carrier", "PacketID", "Data", "EOF"),
        min_bytes=3,
        max_bytes=19,
    ),
    PacketType.RTS: PacketSpec(
        fields=("RTS Control Frame",),
        min_bytes=20,
        max_bytes=20,
    ),
    PacketType.CTS: PacketSpec(
        fields=("Carrier", "PacketID", "TxCoilID", "RxCoilID", "EOF"),
        min_bytes=5,
        max_bytes=5,
    ),
}

_missing = set(PacketType) - set(_PACKET_SPECS)
if _missing:
    raise RuntimeError(f"Packet catalog is missing entries for: {sorted(p.name for p in _missing)}")


class PacketCatalog:
    """Lookup of packet structure and costing size.

    Variable-size packets (DATA) are costed at a representative size that
    must fall inside the packet's size range.

    Example:
        >>> catalog = PacketCatalog(data_bytes=10)
        >>> catalog.describe(PacketType.REV).structure
        '[Carrier|Preamble|TargetID|PacketID|TxCoilID|EOF] (13 bytes)'
        >>> catalog.bit_size(PacketType.DATA)
        80
    """

    def __init__(self, data_bytes: int = 10):
        """Initialize the catalog.

        Args:
            data_bytes: Representative DATA packet size used for costing.

        Raises:
            ValueError: If data_bytes is outside the DATA size range.
        """
        spec = _PACKET_SPECS[PacketType.DATA]
        if not spec.min_bytes <= data_bytes <= spec.max_bytes:
            raise ValueError(
                f"data_bytes must be in [{spec.min_bytes}, {spec.max_bytes}], got {data_bytes}"
            )
        self.data_bytes = data_bytes

    @staticmethod
    def describe(packet_type: PacketType) -> PacketSpec:
        """Get the wire-structure description of a packet type."""
        return _PACKET_SPECS[packet_type]

    def size_bytes(self, packet_type: PacketType) -> int:
        """Byte size used for costing a packet of this type."""
        spec = _PACKET_SPECS[packet_type]
        if spec.is_fixed:
            return spec.min_bytes
        return self.data_bytes

    def bit_size(self, packet_type: PacketType) -> int:
        """Bit size used for costing a packet of this type."""
        return self.size_bytes(packet_type) * 8
