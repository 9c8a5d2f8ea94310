from supabase import Client
from rateam.config import settings
from rateam.modules.polls.events import PollEventBroker
from rateam.modules.polls.schemas import (
    PollCreate, PollRequestCreate, PollResponse, PollWithResultsResponse,
    PollStatus, VoteResponse
)
from rateam.modules.polls.tally import tally_poll, find_user_vote
from rateam.modules.polls.vote_gate import single_flight
from rateam.modules.users.service import clean_optional
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


def poll_has_ended(poll: PollResponse, now: Optional[datetime] = None) -> bool:
    if poll.ends_at is None:
        return False
    ends_at = poll.ends_at if poll.ends_at.tzinfo else poll.ends_at.replace(tzinfo=timezone.utc)
    return ends_at <= (now or datetime.now(timezone.utc))


def with_results(poll: dict, votes: List[dict], user_id: Optional[str] = None) -> PollWithResultsResponse:
    """Attach tally results (percentages rounded for display) and the caller's vote"""
    response = PollResponse(**poll)
    results = tally_poll(response.options, votes, poll_id=response.id)
    for option in results:
        option.percentage = round(option.percentage, 1)
    return PollWithResultsResponse(
        **response.model_dump(),
        results=results,
        total_votes=sum(option.votes for option in results),
        my_vote=find_user_vote(response.options, votes, user_id, poll_id=response.id),
    )


class PollService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _fetch_poll(self, poll_id: str) -> dict:
        result = self.supabase.table("polls")\
            .select("*")\
            .eq("id", poll_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Poll not found")
        return result.data

    def _fetch_votes(self, poll_ids: List[str]) -> List[dict]:
        if not poll_ids:
            return []
        result = self.supabase.table("poll_votes")\
            .select("poll_id, user_id, option_index")\
            .in_("poll_id", poll_ids)\
            .execute()
        return result.data or []

    def list_active_polls(self, user_id: Optional[str] = None) -> List[PollWithResultsResponse]:
        """Active polls newest first, each with its results"""
        try:
            result = self.supabase.table("polls")\
                .select("*")\
                .eq("status", PollStatus.ACTIVE.value)\
                .order("created_at", desc=True)\
                .execute()
            polls = result.data or []
            votes = self._fetch_votes([p["id"] for p in polls])
            return [with_results(poll, votes, user_id) for poll in polls]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching polls: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_poll(self, poll_id: str, user_id: Optional[str] = None, include_requested: bool = False) -> PollWithResultsResponse:
        """One poll with results. Requested polls are only visible to admins."""
        try:
            poll = self._fetch_poll(poll_id)
            if poll.get("status") != PollStatus.ACTIVE.value and not include_requested:
                raise HTTPException(status_code=404, detail="Poll not found")
            return with_results(poll, self._fetch_votes([poll_id]), user_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _insert_poll(self, title: str, description: Optional[str], options: List[str],
                     ends_at: Optional[datetime], status: PollStatus, created_by: str) -> PollResponse:
        result = self.supabase.table("polls").insert({
            "title": title,
            "description": description,
            "options": options,
            "ends_at": ends_at.isoformat() if ends_at else None,
            "status": status.value,
            "created_by": created_by
        }).execute()

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create poll")

        return PollResponse(**result.data[0])

    def create_poll(self, poll_data: PollCreate, created_by: str) -> PollResponse:
        """Create an active poll (admin)"""
        try:
            poll = self._insert_poll(
                poll_data.title, clean_optional(poll_data.description), poll_data.options,
                poll_data.ends_at, PollStatus.ACTIVE, created_by
            )
            logger.info(f"Poll {poll.id} created by {created_by}")
            return poll
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def request_poll(self, request_data: PollRequestCreate, created_by: str) -> PollResponse:
        """Store a user's poll suggestion for admin review"""
        try:
            if len(request_data.options) > settings.poll_request_max_options:
                raise HTTPException(
                    status_code=400,
                    detail=f"A poll request can have at most {settings.poll_request_max_options} options"
                )
            description = clean_optional(request_data.description) or ""
            reason = clean_optional(request_data.reason)
            if reason:
                description = f"{description}\n\nRequester's reason: {reason}"
            return self._insert_poll(
                request_data.title, description or None, request_data.options,
                request_data.ends_at, PollStatus.REQUESTED, created_by
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_all_polls(self, status: Optional[PollStatus] = None) -> List[PollResponse]:
        """Every poll, newest first (admin)"""
        try:
            query = self.supabase.table("polls").select("*")
            if status:
                query = query.eq("status", status.value)
            result = query.order("created_at", desc=True).execute()
            return [PollResponse(**poll) for poll in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def approve_poll(self, poll_id: str) -> PollResponse:
        """Promote a requested poll to active"""
        try:
            poll = self._fetch_poll(poll_id)
            if poll.get("status") != PollStatus.REQUESTED.value:
                raise HTTPException(status_code=400, detail="Only requested polls can be approved")

            result = self.supabase.table("polls")\
                .update({"status": PollStatus.ACTIVE.value})\
                .eq("id", poll_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Poll not found")

            logger.info(f"Poll {poll_id} approved")
            return PollResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_poll(self, poll_id: str) -> bool:
        """Delete a poll and its votes (admin). Rejecting a request is a delete."""
        try:
            self._fetch_poll(poll_id)

            self.supabase.table("poll_votes")\
                .delete()\
                .eq("poll_id", poll_id)\
                .execute()

            result = self.supabase.table("polls")\
                .delete()\
                .eq("id", poll_id)\
                .execute()

            logger.info(f"Poll {poll_id} deleted")
            return len(result.data) > 0
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def submit_vote(self, poll_id: str, user_id: str, option_index: int,
                    events: Optional[PollEventBroker] = None) -> VoteResponse:
        """Cast or change the caller's single vote on an active poll"""
        try:
            poll = PollResponse(**self._fetch_poll(poll_id))
            if poll.status != PollStatus.ACTIVE:
                raise HTTPException(status_code=400, detail="Poll is not open for voting")
            if poll_has_ended(poll):
                raise HTTPException(status_code=400, detail="Poll has ended")
            if not 0 <= option_index < len(poll.options):
                raise HTTPException(status_code=422, detail=f"Option index must be between 0 and {len(poll.options) - 1}")

            with single_flight(poll_id, user_id):
                existing = self.supabase.table("poll_votes")\
                    .select("option_index")\
                    .eq("poll_id", poll_id)\
                    .eq("user_id", user_id)\
                    .execute()
                changed = bool(existing.data)

                result = self.supabase.table("poll_votes")\
                    .upsert({
                        "poll_id": poll_id,
                        "user_id": user_id,
                        "option_index": option_index
                    }, on_conflict="poll_id,user_id")\
                    .execute()

                if not result.data:
                    raise HTTPException(status_code=500, detail="Failed to record vote")

            if events is not None:
                events.publish(poll_id, {"type": "vote_changed", "poll_id": poll_id})

            return VoteResponse(poll_id=poll_id, user_id=user_id, option_index=option_index, changed=changed)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error recording vote on poll {poll_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
