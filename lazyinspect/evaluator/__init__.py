"""Evaluator subprocess protocol and client worker."""

from .client import EvaluatorClient, EvaluatorResult
from .protocol import ProtocolError, decode_response, encode_request

__all__ = [
    "EvaluatorClient",
    "EvaluatorResult",
    "ProtocolError",
    "decode_response",
    "encode_request",
]
