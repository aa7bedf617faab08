"""Node identifiers in the form ``zone.node``."""

from __future__ import annotations

from .logger import get_logger

_UINT64_LIMIT = 1 << 64


def _parse_uint(text: str) -> int | None:
    if text.isascii() and text.isdigit():
        value = int(text)
        if value < _UINT64_LIMIT:
            return value
    return None


class ID(str):
    """Identifier of a node, written as ``zone.node``."""

    __slots__ = ()

    def zone(self) -> int:
        """Return the zone part, or 0 when it is missing or not a number."""
        if "." not in self:
            get_logger().warning('id %s does not contain "."', self)
            return 0
        part = self.split(".")[0]
        zone = _parse_uint(part)
        if zone is None:
            get_logger().error("Failed to convert Zone %s to int", part)
            return 0
        return zone

    def node(self) -> int:
        """Return the node part, or 0 when it is not a number.

        An identifier without a dot is read as a bare node number.
        """
        if "." not in self:
            get_logger().warning('id %s does not contain "."', self)
            part = str(self)
        else:
            part = self.split(".")[1]
        node = _parse_uint(part)
        if node is None:
            get_logger().error("Failed to convert Node %s to int", part)
            return 0
        return node

    def sort_key(self) -> tuple[int, int]:
        """Key that orders identifiers by zone, then by node."""
        return self.zone(), self.node()


def new_id(zone: int, node: int) -> ID:
    """Build an identifier from zone and node numbers, dropping any sign."""
    return ID(f"{abs(zone)}.{abs(node)}")