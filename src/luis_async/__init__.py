"""Async client for Microsoft LUIS intent recognition."""

from luis_async.client import LuisClient, NoResultAvailableError
from luis_async.config import ClientConfig
from luis_async.models import DialogState, Entity, Intent, RecognitionResult
from luis_async.transport import HttpLuisTransport, RecognitionTransport, TransportFailure

__all__ = [
    "ClientConfig",
    "DialogState",
    "Entity",
    "HttpLuisTransport",
    "Intent",
    "LuisClient",
    "NoResultAvailableError",
    "RecognitionResult",
    "RecognitionTransport",
    "TransportFailure",
]
