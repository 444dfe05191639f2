"""Networking for the Streamer.bot receiver."""

from .udp_receiver import LOOPBACK_HOST, ReceiverState, UdpReceiverService

__all__ = ["LOOPBACK_HOST", "ReceiverState", "UdpReceiverService"]
