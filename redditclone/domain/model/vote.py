"""Vote entity and the per-post vote ledger.

Each user holds at most one vote per post, either up (+1) or down (-1).
The ledger defines how casting, flipping and retracting a vote moves the
post score.
"""

from typing import Iterator

from pydantic import Field, RootModel

from redditclone.domain.error import VoteNotFoundError
from redditclone.domain.model.common import DomainModel
from redditclone.domain.value import UserId, VoteDirection


class PostVote(DomainModel):
    """A single user's vote on a post."""

    user: UserId
    vote: VoteDirection


class VoteLedger(RootModel[dict[UserId, PostVote]]):
    """Mapping of voter ID to that voter's vote.

    Business rules:
    - One entry per voter
    - Casting in the current direction changes nothing
    - Casting in the opposite direction flips the entry, moving score by 2
    """

    root: dict[UserId, PostVote] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.root)

    def values(self) -> Iterator[PostVote]:
        return iter(self.root.values())

    def __contains__(self, user_id: object) -> bool:
        return user_id in self.root

    def get(self, user_id: UserId) -> PostVote | None:
        return self.root.get(user_id)

    def cast(self, user_id: UserId, direction: VoteDirection) -> tuple[PostVote, bool, int]:
        """Record a vote in the given direction.

        Args:
            user_id: Voter ID
            direction: Requested vote direction

        Returns:
            Tuple of (current vote, whether the entry was created, score delta)
        """
        current = self.root.get(user_id)
        if current is None:
            vote = PostVote(user=user_id, vote=direction)
            self.root[user_id] = vote
            return vote, True, direction.value

        if current.vote == direction:
            return current, False, 0

        # Flip: undo the old vote and apply the new one in one step
        vote = PostVote(user=user_id, vote=direction)
        self.root[user_id] = vote
        return vote, False, 2 * direction.value

    def retract(self, user_id: UserId) -> tuple[PostVote, int]:
        """Remove a voter's entry.

        Returns:
            Tuple of (removed vote, score delta)

        Raises:
            VoteNotFoundError: If the user has not voted
        """
        vote = self.root.pop(user_id, None)
        if vote is None:
            raise VoteNotFoundError(user_id)
        return vote, -vote.vote.value
