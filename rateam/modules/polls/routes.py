from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from rateam.config import settings
from rateam.database.supabase_client import get_supabase, get_admin_supabase
from rateam.modules.auth.schemas import CurrentUser
from rateam.modules.polls.events import PollEventBroker, get_poll_events
from rateam.modules.polls.schemas import (
    PollCreate, PollRequestCreate, PollResponse, PollWithResultsResponse,
    PollStatus, VoteCreate, VoteResponse
)
from rateam.modules.polls.service import PollService
from rateam.core.dependencies import get_optional_user, require_permission, has_permission
from supabase import Client
from typing import List, Optional
import asyncio
import json
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/polls", tags=["polls"])


def get_poll_service(supabase: Client = Depends(get_supabase)) -> PollService:
    return PollService(supabase)


def get_admin_poll_service(supabase: Client = Depends(get_admin_supabase)) -> PollService:
    return PollService(supabase)


@router.get("", response_model=List[PollWithResultsResponse])
async def list_active_polls(
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
    service: PollService = Depends(get_poll_service)
):
    """Active polls with results; signed-in callers also see their own vote"""
    return service.list_active_polls(user_id=current_user.id if current_user else None)


@router.post("", response_model=PollResponse, status_code=201)
async def create_poll(
    poll_data: PollCreate,
    current_user: CurrentUser = Depends(require_permission("polls:manage")),
    service: PollService = Depends(get_admin_poll_service)
):
    """Create an active poll (admin)"""
    return service.create_poll(poll_data, current_user.id)


@router.post("/requests", response_model=PollResponse, status_code=201)
async def request_poll(
    request_data: PollRequestCreate,
    current_user: CurrentUser = Depends(require_permission("polls:request")),
    service: PollService = Depends(get_poll_service)
):
    """Suggest a poll; admins approve or reject it"""
    return service.request_poll(request_data, current_user.id)


@router.get("/admin/all", response_model=List[PollResponse])
async def list_all_polls(
    status: Optional[PollStatus] = None,
    current_user: CurrentUser = Depends(require_permission("polls:manage")),
    service: PollService = Depends(get_admin_poll_service)
):
    """List polls of every status (admin)"""
    return service.list_all_polls(status=status)


@router.get("/{poll_id}", response_model=PollWithResultsResponse)
async def get_poll(
    poll_id: str,
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
    service: PollService = Depends(get_poll_service)
):
    include_requested = current_user is not None and has_permission(current_user, "polls:manage")
    return service.get_poll(
        poll_id,
        user_id=current_user.id if current_user else None,
        include_requested=include_requested
    )


@router.post("/{poll_id}/approve", response_model=PollResponse)
async def approve_poll(
    poll_id: str,
    current_user: CurrentUser = Depends(require_permission("polls:manage")),
    service: PollService = Depends(get_admin_poll_service)
):
    """Promote a requested poll to active (admin)"""
    return service.approve_poll(poll_id)


@router.delete("/{poll_id}", status_code=204)
async def delete_poll(
    poll_id: str,
    current_user: CurrentUser = Depends(require_permission("polls:manage")),
    service: PollService = Depends(get_admin_poll_service)
):
    """Delete a poll or reject a poll request (admin)"""
    service.delete_poll(poll_id)
    return None


@router.post("/{poll_id}/vote", response_model=VoteResponse)
async def vote(
    poll_id: str,
    vote_data: VoteCreate,
    current_user: CurrentUser = Depends(require_permission("polls:vote")),
    service: PollService = Depends(get_poll_service),
    events: PollEventBroker = Depends(get_poll_events)
):
    """Cast a vote; voting again changes the recorded option"""
    return service.submit_vote(poll_id, current_user.id, vote_data.option_index, events=events)


@router.get("/{poll_id}/events")
async def poll_events_stream(
    poll_id: str,
    request: Request,
    events: PollEventBroker = Depends(get_poll_events)
):
    """Server-Sent Events stream telling clients when to refetch a poll's results"""
    subscription = events.subscribe(poll_id)

    async def event_stream():
        try:
            yield f"event: subscribed\ndata: {json.dumps({'poll_id': poll_id})}\n\n"
            while not await request.is_disconnected():
                try:
                    event = await asyncio.wait_for(
                        subscription.queue.get(), timeout=settings.poll_events_keepalive_seconds
                    )
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                yield f"event: {event['type']}\ndata: {json.dumps(event)}\n\n"
        finally:
            events.unsubscribe(subscription)
            logger.debug(f"Event stream for poll {poll_id} closed")

    return StreamingResponse(event_stream(), media_type="text/event-stream")
