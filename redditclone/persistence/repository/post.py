"""PostgreSQL implementation of Post repository.

Every mutation is one ``UPDATE ... RETURNING`` that expresses only the
delta (score offset, one ledger entry, one comment, view increment). The
cached upvote percentage is recomputed inside the same statement from the
row's own values, so concurrent writers never overwrite each other.
"""

from typing import Any, List

import logfire
from sqlalchemy import (
    ColumnElement,
    Integer,
    Update,
    and_,
    case,
    cast,
    desc,
    func,
    literal,
    select,
    update,
)
from sqlalchemy.dialects.postgresql import JSONB, JSONPATH
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.types import Text

from redditclone.domain.error import (
    CommentNotFoundError,
    PostNotFoundError,
    StorageError,
    VoteNotFoundError,
)
from redditclone.domain.model import Post, PostVote
from redditclone.domain.repository.post import PostRepository, require_identity
from redditclone.domain.value import (
    CallerIdentity,
    CommentId,
    PostCategory,
    PostId,
    PostPayload,
    UserId,
)
from redditclone.persistence.mappers import (
    comment_to_doc,
    load_post,
    post_to_dict,
    vote_to_doc,
)
from redditclone.persistence.tables import posts_table

# Removes the comment with id $cid from the comment array
_DROP_COMMENT_PATH = "$[*] ? (@.id != $cid)"


def _percentage(score: ColumnElement[Any], total: ColumnElement[Any]) -> ColumnElement[Any]:
    """SQL form of the upvote percentage over already-adjusted values."""
    return case(
        (total == 0, 0),
        else_=(score + total) * 100 // (total * 2),
    )


def _stored_direction(voter: str) -> ColumnElement[Any]:
    """The voter's direction in the stored ledger, 0 when absent."""
    return func.coalesce(
        cast(posts_table.c.votes[(voter, "vote")].astext, Integer), 0
    )


def vote_statement(post_id: PostId, vote: PostVote) -> Update:
    """Build the delta update casting or flipping one voter's vote.

    The score offset and the vote count are derived from the stored ledger
    entry, not from the caller's read. When the row is locked by a concurrent
    writer, PostgreSQL re-evaluates them against the committed row, so a
    repeated or crossing vote from the same voter is applied to what is
    actually stored.
    """
    voter = str(vote.user)
    score = posts_table.c.score + (vote.vote.value - _stored_direction(voter))
    total = posts_table.c.vote_count + case(
        (posts_table.c.votes.has_key(voter), 0), else_=1
    )
    votes = posts_table.c.votes.op("||", return_type=JSONB)(
        literal({voter: vote_to_doc(vote)}, JSONB)
    )

    return (
        update(posts_table)
        .where(posts_table.c.id == post_id)
        .values(
            score=score,
            votes=votes,
            vote_count=total,
            upvote_percentage=_percentage(score, total),
        )
        .returning(posts_table)
    )


def unvote_statement(post_id: PostId, voter: UserId) -> Update:
    """Build the delta update removing one voter's ledger entry.

    The score offset is the negated stored direction.
    """
    score = posts_table.c.score - _stored_direction(str(voter))
    total = posts_table.c.vote_count - 1
    return (
        update(posts_table)
        .where(
            and_(posts_table.c.id == post_id, posts_table.c.votes.has_key(str(voter)))
        )
        .values(
            score=score,
            votes=posts_table.c.votes.op("-", return_type=JSONB)(literal(str(voter), Text)),
            vote_count=total,
            upvote_percentage=_percentage(score, total),
        )
        .returning(posts_table)
    )


def push_comment_statement(post_id: PostId, comment_doc: dict[str, Any]) -> Update:
    """Build the delta update appending one comment."""
    return (
        update(posts_table)
        .where(posts_table.c.id == post_id)
        .values(
            comments=posts_table.c.comments.op("||", return_type=JSONB)(
                literal([comment_doc], JSONB)
            )
        )
        .returning(posts_table)
    )


def pull_comment_statement(post_id: PostId, comment_id: CommentId) -> Update:
    """Build the delta update removing one comment by ID."""
    remaining = func.jsonb_path_query_array(
        posts_table.c.comments,
        cast(literal(_DROP_COMMENT_PATH), JSONPATH),
        func.jsonb_build_object("cid", str(comment_id)),
        type_=JSONB,
    )
    return (
        update(posts_table)
        .where(
            and_(
                posts_table.c.id == post_id,
                posts_table.c.comments.contains([{"id": str(comment_id)}]),
            )
        )
        .values(comments=remaining)
        .returning(posts_table)
    )


def increment_views_statement(post_id: PostId) -> Update:
    return (
        update(posts_table)
        .where(posts_table.c.id == post_id)
        .values(views=posts_table.c.views + 1)
    )


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository.

    Transactions are owned by the session provider, which commits at the
    end of the request. SQLAlchemy failures surface as ``StorageError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_all(self) -> List[Post]:
        """Find all posts, highest score first."""
        with logfire.span("post_repository.find_all"):
            stmt = select(posts_table).order_by(
                desc(posts_table.c.score), posts_table.c.seq
            )
            posts = await self._fetch_all(stmt, "post_repository.find_all")
            logfire.info("Found posts", count=len(posts))
            return posts

    async def find_by_category(self, category: PostCategory) -> List[Post]:
        """Find posts in a category, highest score first."""
        with logfire.span("post_repository.find_by_category", category=category.value):
            stmt = (
                select(posts_table)
                .where(posts_table.c.category == category.value)
                .order_by(desc(posts_table.c.score), posts_table.c.seq)
            )
            return await self._fetch_all(stmt, "post_repository.find_by_category")

    async def find_by_author(self, login: str) -> List[Post]:
        """Find posts by author login, newest first."""
        with logfire.span("post_repository.find_by_author", login=login):
            stmt = (
                select(posts_table)
                .where(posts_table.c.author["login"].astext == login)
                .order_by(desc(posts_table.c.created), desc(posts_table.c.seq))
            )
            return await self._fetch_all(stmt, "post_repository.find_by_author")

    async def find_by_id(self, post_id: PostId) -> Post:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            try:
                result = await self.session.execute(stmt)
            except SQLAlchemyError as e:
                raise StorageError("post_repository.find_by_id") from e

            row = result.fetchone()
            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                raise PostNotFoundError(post_id)
            return load_post(row._asdict(), "post_repository.find_by_id")

    async def create(self, payload: PostPayload, author: CallerIdentity | None) -> Post:
        """Create and store a post."""
        author = require_identity(author)
        post = Post.create(author, payload)
        with logfire.span(
            "post_repository.create",
            post_id=str(post.id),
            title=post.title,
            category=post.category.value,
            author=author.login,
        ):
            stmt = posts_table.insert().values(**post_to_dict(post))
            try:
                await self.session.execute(stmt)
                await self.session.flush()
            except SQLAlchemyError as e:
                raise StorageError("post_repository.create") from e

            logfire.info("Post inserted", post_id=str(post.id))
            return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post (hard delete)."""
        with logfire.span("post_repository.delete", post_id=str(post_id)):
            stmt = posts_table.delete().where(posts_table.c.id == post_id)
            try:
                result = await self.session.execute(stmt)
                await self.session.flush()
            except SQLAlchemyError as e:
                raise StorageError("post_repository.delete") from e

            if result.rowcount == 0:
                raise PostNotFoundError(post_id)

    async def add_comment(
        self, post: Post, author: CallerIdentity | None, body: str
    ) -> Post:
        """Append a comment to the stored comment array."""
        author = require_identity(author)
        comment = post.add_comment(author, body)
        with logfire.span(
            "post_repository.add_comment",
            post_id=str(post.id),
            comment_id=str(comment.id),
        ):
            stmt = push_comment_statement(post.id, comment_to_doc(comment))
            row = await self._update_one(stmt, "post_repository.add_comment")
            if row is None:
                raise PostNotFoundError(post.id)
            return load_post(row, "post_repository.add_comment")

    async def delete_comment(self, post: Post, comment_id: CommentId) -> Post:
        """Remove a comment from the stored comment array."""
        post.delete_comment(comment_id)
        with logfire.span(
            "post_repository.delete_comment",
            post_id=str(post.id),
            comment_id=str(comment_id),
        ):
            stmt = pull_comment_statement(post.id, comment_id)
            row = await self._update_one(stmt, "post_repository.delete_comment")
            if row is None:
                await self._ensure_exists(post.id)
                # Removed by a concurrent request after our read
                raise CommentNotFoundError(comment_id)
            return load_post(row, "post_repository.delete_comment")

    async def upvote(self, post: Post, voter: CallerIdentity | None) -> Post:
        """Vote the post up."""
        voter = require_identity(voter)
        return await self._vote(post, voter, "post_repository.upvote", post.upvote)

    async def downvote(self, post: Post, voter: CallerIdentity | None) -> Post:
        """Vote the post down."""
        voter = require_identity(voter)
        return await self._vote(post, voter, "post_repository.downvote", post.downvote)

    async def unvote(self, post: Post, voter: CallerIdentity | None) -> Post:
        """Withdraw the voter's ledger entry."""
        voter = require_identity(voter)
        post.unvote(voter.id)
        with logfire.span(
            "post_repository.unvote", post_id=str(post.id), user_id=str(voter.id)
        ):
            stmt = unvote_statement(post.id, voter.id)
            row = await self._update_one(stmt, "post_repository.unvote")
            if row is None:
                await self._ensure_exists(post.id)
                raise VoteNotFoundError(voter.id)
            return load_post(row, "post_repository.unvote")

    async def increment_views(self, post_id: PostId) -> None:
        """Atomically increment views by 1.

        Runs in a savepoint so a failure here leaves the request's
        transaction usable.
        """
        stmt = increment_views_statement(post_id)
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError("post_repository.increment_views") from e

        if result.rowcount == 0:
            raise PostNotFoundError(post_id)

    async def _vote(self, post: Post, voter: CallerIdentity, operation: str, cast_vote) -> Post:
        vote, created = cast_vote(voter.id)
        with logfire.span(
            operation,
            post_id=str(post.id),
            user_id=str(voter.id),
            vote=vote.vote.value,
            created=created,
        ):
            # Written even when the read shows this direction already; the
            # stored entry may have changed since
            stmt = vote_statement(post.id, vote)
            row = await self._update_one(stmt, operation)
            if row is None:
                raise PostNotFoundError(post.id)
            return load_post(row, operation)

    async def _fetch_all(self, stmt, operation: str) -> List[Post]:
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError(operation) from e
        return [load_post(row._asdict(), operation) for row in result.fetchall()]

    async def _update_one(self, stmt: Update, operation: str) -> dict[str, Any] | None:
        """Run a RETURNING update; None when no row matched."""
        try:
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
        except SQLAlchemyError as e:
            raise StorageError(operation) from e
        return row._asdict() if row is not None else None

    async def _ensure_exists(self, post_id: PostId) -> None:
        stmt = select(posts_table.c.id).where(posts_table.c.id == post_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError("post_repository.exists") from e
        if result.scalar() is None:
            raise PostNotFoundError(post_id)
