"""Ports consumed by the orchestration layer."""

from ebics_client.domain.ebics.ports.key_exchange_port import KeyExchangePort
from ebics_client.domain.ebics.ports.key_generator_port import KeyGeneratorPort
from ebics_client.domain.ebics.ports.letter_renderer_port import (
    InitLetter,
    LetterRendererPort,
)
from ebics_client.domain.ebics.ports.serialization_port import SerializationPort
from ebics_client.domain.ebics.ports.trace_port import TracePort
from ebics_client.domain.ebics.ports.transfer_port import TransferPort

__all__ = [
    "InitLetter",
    "KeyExchangePort",
    "KeyGeneratorPort",
    "LetterRendererPort",
    "SerializationPort",
    "TracePort",
    "TransferPort",
]
