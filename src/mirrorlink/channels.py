"""Duplex channel pair between a client and an agent's control endpoint.

Each direction is an independent bounded ``asyncio.Queue`` so the sending
and receiving halves can be owned, drained and shut down separately.
Message payloads are opaque here; only their direction matters.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, TypeAlias

DEFAULT_CHANNEL_CAPACITY = 512

ClientMessage: TypeAlias = Any
DaemonMessage: TypeAlias = Any
ChannelPair: TypeAlias = tuple[asyncio.Queue[ClientMessage], asyncio.Queue[DaemonMessage]]


@dataclass(frozen=True, slots=True)
class AgentConnection:
    """Outbound sender of client messages and inbound receiver of daemon messages.

    Owns nothing else; whoever receives it is responsible for shutdown.
    """

    sender: asyncio.Queue[ClientMessage]
    receiver: asyncio.Queue[DaemonMessage]

    @classmethod
    def from_pair(cls, pair: ChannelPair) -> AgentConnection:
        sender, receiver = pair
        return cls(sender=sender, receiver=receiver)

    def as_pair(self) -> ChannelPair:
        return self.sender, self.receiver


def open_channel_pair(capacity: int = DEFAULT_CHANNEL_CAPACITY) -> ChannelPair:
    """Create a fresh pair of bounded queues, one per direction."""
    if capacity < 1:
        msg = f"Channel capacity must be positive, got {capacity}"
        raise ValueError(msg)
    sender: asyncio.Queue[ClientMessage] = asyncio.Queue(maxsize=capacity)
    receiver: asyncio.Queue[DaemonMessage] = asyncio.Queue(maxsize=capacity)
    return sender, receiver


__all__ = [
    "DEFAULT_CHANNEL_CAPACITY",
    "AgentConnection",
    "ChannelPair",
    "ClientMessage",
    "DaemonMessage",
    "open_channel_pair",
]
