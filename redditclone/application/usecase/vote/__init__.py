"""Vote use cases."""

from .unvote import UnvoteRequest, UnvoteUseCase
from .vote import VoteRequest, VoteUseCase

__all__ = [
    "UnvoteRequest",
    "UnvoteUseCase",
    "VoteRequest",
    "VoteUseCase",
]
