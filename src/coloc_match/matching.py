"""Likes and mutual-interest matches between seekers and landlords.

A seeker liking a listing and the listing's landlord liking that seeker back
(in either order) creates one match, scored with the compatibility engine.
The two parties of an active match can then exchange messages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from .config import ScoringConfig
from .data.schema import ListingProfile, SeekerProfile
from .scoring.compatibility import compute_compatibility

logger = logging.getLogger("coloc_match")


class MatchingError(ValueError):
    """Raised for likes or messages the ledger refuses to record."""


class MatchStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class Like:
    liker_id: str
    target_id: str  # seeker for landlord likes, listing for seeker likes
    listing_id: str
    created_at: datetime


@dataclass(frozen=True)
class Match:
    match_id: str
    seeker_id: str
    landlord_id: str
    listing_id: str
    compatibility_score: int
    status: MatchStatus
    matched_at: datetime


@dataclass(frozen=True)
class Message:
    message_id: str
    match_id: str
    sender_id: str
    content: str
    created_at: datetime
    read_at: Optional[datetime] = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MatchRegistry:
    """In-memory like/match ledger keyed like the hosted ``likes``/``matches`` tables."""

    def __init__(self, cfg: Optional[ScoringConfig] = None):
        self.cfg = cfg
        self._seeker_likes: dict[tuple[str, str], Like] = {}  # (seeker_id, listing_id)
        self._landlord_likes: dict[tuple[str, str], Like] = {}  # (seeker_id, listing_id)
        self._matches: dict[str, Match] = {}
        self._by_pair: dict[tuple[str, str, str], str] = {}  # (seeker, landlord, listing) -> match_id
        self._like_log: list[Like] = []
        self._messages: dict[str, Message] = {}

    def like_listing(self, seeker: SeekerProfile, listing: ListingProfile) -> Optional[Match]:
        """Record a seeker's like. Returns the match if the landlord already liked them."""
        self._check(seeker, listing)
        key = (seeker.user_id, listing.listing_id)
        if key not in self._seeker_likes:
            self._seeker_likes[key] = Like(seeker.user_id, listing.listing_id, listing.listing_id, _now())
            self._like_log.append(self._seeker_likes[key])
            logger.debug(f"{seeker.user_id} liked {listing.listing_id}")
        if key in self._landlord_likes:
            return self._create_match(seeker, listing)
        return None

    def like_seeker(
        self, landlord_id: str, seeker: SeekerProfile, listing: ListingProfile
    ) -> Optional[Match]:
        """Record a landlord's interest in a seeker for one of their listings."""
        if listing.landlord_id != landlord_id:
            raise MatchingError(f"{landlord_id} does not own listing {listing.listing_id}")
        self._check(seeker, listing)
        key = (seeker.user_id, listing.listing_id)
        if key not in self._landlord_likes:
            self._landlord_likes[key] = Like(landlord_id, seeker.user_id, listing.listing_id, _now())
            self._like_log.append(self._landlord_likes[key])
            logger.debug(f"{landlord_id} liked {seeker.user_id} for {listing.listing_id}")
        if key in self._seeker_likes:
            return self._create_match(seeker, listing)
        return None

    def likes_for_listing(self, listing_id: str) -> list[Like]:
        return [like for (_, lid), like in self._seeker_likes.items() if lid == listing_id]

    def likes_for_user(self, user_id: str) -> list[Like]:
        """Likes given by ``user_id``, newest first."""
        return [like for like in reversed(self._like_log) if like.liker_id == user_id]

    def liked_listing_ids(self, seeker_id: str) -> set[str]:
        return {lid for (sid, lid) in self._seeker_likes if sid == seeker_id}

    def matches_for_user(self, user_id: str) -> list[Match]:
        """Active matches where ``user_id`` is the seeker or the landlord, newest first."""
        found = [
            m for m in self._matches.values()
            if m.status == MatchStatus.ACTIVE and user_id in (m.seeker_id, m.landlord_id)
        ]
        return sorted(found, key=lambda m: m.matched_at, reverse=True)

    def match_between(self, user_a: str, user_b: str) -> Optional[Match]:
        for m in self.matches_for_user(user_a):
            if user_b in (m.seeker_id, m.landlord_id) and user_a != user_b:
                return m
        return None

    def update_status(self, match_id: str, status: MatchStatus) -> Match:
        if match_id not in self._matches:
            raise KeyError(f"Unknown match: {match_id}")
        updated = replace(self._matches[match_id], status=MatchStatus(status))
        self._matches[match_id] = updated
        logger.info(f"Match {match_id} is now {updated.status.value}")
        return updated

    # ── Messaging ────────────────────────────────────────────────────────────

    def send_message(self, match_id: str, sender_id: str, content: str) -> Message:
        """Post a message on an active match. Only its seeker or landlord may send."""
        if match_id not in self._matches:
            raise KeyError(f"Unknown match: {match_id}")
        match = self._matches[match_id]
        if match.status != MatchStatus.ACTIVE:
            raise MatchingError(f"Match {match_id} is {match.status.value}")
        if sender_id not in (match.seeker_id, match.landlord_id):
            raise MatchingError(f"{sender_id} is not part of match {match_id}")
        if not content or not content.strip():
            raise MatchingError("Messages need content")

        message = Message(
            message_id=f"msg-{len(self._messages) + 1}",
            match_id=match_id,
            sender_id=sender_id,
            content=content,
            created_at=_now(),
        )
        self._messages[message.message_id] = message
        logger.debug(f"{sender_id} sent {message.message_id} on {match_id}")
        return message

    def messages_for(self, match_id: str) -> list[Message]:
        """Messages of a match, oldest first."""
        if match_id not in self._matches:
            raise KeyError(f"Unknown match: {match_id}")
        return [m for m in self._messages.values() if m.match_id == match_id]

    def mark_read(self, message_id: str) -> Message:
        if message_id not in self._messages:
            raise KeyError(f"Unknown message: {message_id}")
        message = self._messages[message_id]
        if message.read_at is None:
            message = replace(message, read_at=_now())
            self._messages[message_id] = message
        return message

    def unread_count(self, match_id: str, user_id: str) -> int:
        """Unread messages on a match sent by the other party."""
        return sum(
            1 for m in self.messages_for(match_id)
            if m.sender_id != user_id and not m.is_read
        )

    def _check(self, seeker: SeekerProfile, listing: ListingProfile) -> None:
        if not seeker.user_id or not listing.listing_id:
            raise MatchingError("Likes need a seeker user_id and a listing_id")
        if not listing.is_active:
            raise MatchingError(f"Listing {listing.listing_id} is not active")
        if listing.landlord_id == seeker.user_id:
            raise MatchingError(f"{seeker.user_id} cannot like their own listing")

    def _create_match(self, seeker: SeekerProfile, listing: ListingProfile) -> Match:
        pair = (seeker.user_id, listing.landlord_id, listing.listing_id)
        if pair in self._by_pair:
            return self._matches[self._by_pair[pair]]

        result = compute_compatibility(seeker, listing, self.cfg)
        match = Match(
            match_id=f"match-{len(self._matches) + 1}",
            seeker_id=seeker.user_id,
            landlord_id=listing.landlord_id,
            listing_id=listing.listing_id,
            compatibility_score=result.total_score,
            status=MatchStatus.ACTIVE,
            matched_at=_now(),
        )
        self._matches[match.match_id] = match
        self._by_pair[pair] = match.match_id
        logger.info(
            f"New match {match.match_id}: {seeker.user_id} <-> {listing.landlord_id} "
            f"on {listing.listing_id} (score {result.total_score})"
        )
        return match
