"""Encoding and decoding of MQTT v5 packets, properties and wire primitives."""

__version__ = "0.3.0"

__all__ = [
    "acks",
    "buffer",
    "packet",
    "property",
    "publish",
    "reason_codes",
    "rng",
    "subscribe",
    "types",
]