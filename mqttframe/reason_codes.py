"""MQTT v5 reason codes and their descriptions."""

from __future__ import annotations

from enum import IntEnum


class ReasonCode(IntEnum):
    """Reason codes carried by acknowledgement and disconnect packets."""

    SUCCESS = 0x00
    GRANTED_QOS1 = 0x01
    GRANTED_QOS2 = 0x02
    DISCONNECT_WITH_WILL_MESSAGE = 0x04
    NO_MATCHING_SUBSCRIBERS = 0x10
    NO_SUBSCRIPTION_EXISTED = 0x11
    CONTINUE_AUTH = 0x18
    RE_AUTHENTICATE = 0x19
    UNSPECIFIED_ERROR = 0x80
    MALFORMED_PACKET = 0x81
    PROTOCOL_ERROR = 0x82
    IMPLEMENTATION_SPECIFIC_ERROR = 0x83
    UNSUPPORTED_PROTOCOL_VERSION = 0x84
    CLIENT_ID_NOT_VALID = 0x85
    BAD_USER_NAME_OR_PASSWORD = 0x86
    NOT_AUTHORIZED = 0x87
    SERVER_UNAVAILABLE = 0x88
    SERVER_BUSY = 0x89
    BANNED = 0x8A
    SERVER_SHUTTING_DOWN = 0x8B
    BAD_AUTH_METHOD = 0x8C
    KEEP_ALIVE_TIMEOUT = 0x8D
    SESSION_TAKE_OVER = 0x8E
    TOPIC_FILTER_INVALID = 0x8F
    TOPIC_NAME_INVALID = 0x90
    PACKET_IDENTIFIER_IN_USE = 0x91
    PACKET_IDENTIFIER_NOT_FOUND = 0x92
    RECEIVE_MAXIMUM_EXCEEDED = 0x93
    TOPIC_ALIAS_INVALID = 0x94
    PACKET_TOO_LARGE = 0x95
    MESSAGE_RATE_TOO_HIGH = 0x96
    QUOTA_EXCEEDED = 0x97
    ADMINISTRATIVE_ACTION = 0x98
    PAYLOAD_FORMAT_INVALID = 0x99
    RETAIN_NOT_SUPPORTED = 0x9A
    QOS_NOT_SUPPORTED = 0x9B
    USE_ANOTHER_SERVER = 0x9C
    SERVER_MOVED = 0x9D
    SHARED_SUBSCRIPTION_NOT_SUPPORTED = 0x9E
    CONNECTION_RATE_EXCEEDED = 0x9F
    MAXIMUM_CONNECT_TIME = 0xA0
    SUBSCRIPTION_IDENTIFIERS_NOT_SUPPORTED = 0xA1
    WILDCARD_SUBSCRIPTION_NOT_SUPPORTED = 0xA2
    TIMER_NOT_SUPPORTED = 0xFD
    BUFF_ERROR = 0xFE
    NETWORK_ERROR = 0xFF

    @classmethod
    def from_byte(cls, value: int) -> "ReasonCode":
        """Map a received byte to a reason code.

        Bytes that name no known code, and the connection-rate code,
        are read as ``NETWORK_ERROR``.
        """
        if value == cls.CONNECTION_RATE_EXCEEDED:
            return cls.NETWORK_ERROR
        try:
            return cls(value)
        except ValueError:
            return cls.NETWORK_ERROR

    def description(self) -> str:
        """A human-readable explanation of the code."""
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.description()


R = ReasonCode

_DESCRIPTIONS: dict[ReasonCode, str] = {
    R.SUCCESS: "Operation was successful!",
    R.GRANTED_QOS1: "Granted QoS level 1!",
    R.GRANTED_QOS2: "Granted QoS level 2!",
    R.DISCONNECT_WITH_WILL_MESSAGE: "Disconnected with Will message!",
    R.NO_MATCHING_SUBSCRIBERS: "No matching subscribers on broker!",
    R.NO_SUBSCRIPTION_EXISTED: "Subscription not exist!",
    R.CONTINUE_AUTH: "Broker asks for more AUTH packets!",
    R.RE_AUTHENTICATE: "Broker requires re-authentication!",
    R.UNSPECIFIED_ERROR: "Unspecified error!",
    R.MALFORMED_PACKET: "Malformed packet sent!",
    R.PROTOCOL_ERROR: "Protocol specific error!",
    R.IMPLEMENTATION_SPECIFIC_ERROR: "Implementation specific error!",
    R.UNSUPPORTED_PROTOCOL_VERSION: "Unsupported protocol version!",
    R.CLIENT_ID_NOT_VALID: "Client sent not valid identification",
    R.BAD_USER_NAME_OR_PASSWORD: "Authentication error, username of password not valid!",
    R.NOT_AUTHORIZED: "Client not authorized!",
    R.SERVER_UNAVAILABLE: "Server unavailable!",
    R.SERVER_BUSY: "Server is busy!",
    R.BANNED: "Client is banned on broker!",
    R.SERVER_SHUTTING_DOWN: "Server is shutting down!",
    R.BAD_AUTH_METHOD: "Provided bad authentication method!",
    R.KEEP_ALIVE_TIMEOUT: "Client reached timeout",
    R.SESSION_TAKE_OVER: "Took over session!",
    R.TOPIC_FILTER_INVALID: "Topic filter is not valid!",
    R.TOPIC_NAME_INVALID: "Topic name is not valid!",
    R.PACKET_IDENTIFIER_IN_USE: "Packet identifier is already in use!",
    R.PACKET_IDENTIFIER_NOT_FOUND: "Packet identifier not found!",
    R.RECEIVE_MAXIMUM_EXCEEDED: "Maximum receive amount exceeded!",
    R.TOPIC_ALIAS_INVALID: "Invalid topic alias!",
    R.PACKET_TOO_LARGE: "Sent packet was too large!",
    R.MESSAGE_RATE_TOO_HIGH: "Message rate is too high!",
    R.QUOTA_EXCEEDED: "Quota exceeded!",
    R.ADMINISTRATIVE_ACTION: "Administrative action!",
    R.PAYLOAD_FORMAT_INVALID: "Invalid payload format!",
    R.RETAIN_NOT_SUPPORTED: "Message retain not supported!",
    R.QOS_NOT_SUPPORTED: "Used QoS is not supported!",
    R.USE_ANOTHER_SERVER: "Use another server!",
    R.SERVER_MOVED: "Server moved!",
    R.SHARED_SUBSCRIPTION_NOT_SUPPORTED: "Shared subscription is not supported",
    R.CONNECTION_RATE_EXCEEDED: "Connection rate exceeded!",
    R.MAXIMUM_CONNECT_TIME: "Maximum connect time exceeded!",
    R.SUBSCRIPTION_IDENTIFIERS_NOT_SUPPORTED: "Subscription identifier not supported!",
    R.WILDCARD_SUBSCRIPTION_NOT_SUPPORTED: "Wildcard subscription not supported!",
    R.TIMER_NOT_SUPPORTED: "Timer implementation is not provided",
    R.BUFF_ERROR: "Error encountered during write / read from packet",
    R.NETWORK_ERROR: "Unknown error!",
}

del R