"""POST/PATCH /api/v1/actions — timeline edits on a posted parade.

The server keeps no edit state: each call takes the full parade and returns
the edited copy, so the client's undo stack stays authoritative.
"""

from __future__ import annotations

from fastapi import APIRouter

from paradesim.api.schemas import (
    AddActionRequest,
    EditResponse,
    ParadeStateSchema,
    RemoveActionRequest,
    RetimeActionRequest,
)
from paradesim.core.parade import ParadeState
from paradesim.engine.editing import add_action, remove_action, timeline_end, update_action

router = APIRouter()


def _response(state: ParadeState, action_id: str | None = None) -> EditResponse:
    return EditResponse(
        state=ParadeStateSchema.from_domain(state),
        action_id=action_id,
        timeline_end=timeline_end(state),
    )


@router.post("/actions", response_model=EditResponse)
def create_action(body: AddActionRequest) -> EditResponse:
    state, action = add_action(
        body.state.to_domain(), body.owner_id, body.type, body.time, body.duration,
    )
    return _response(state, action.id)


@router.patch("/actions/{action_id}", response_model=EditResponse)
def retime_action(action_id: str, body: RetimeActionRequest) -> EditResponse:
    changes = body.model_dump(include={"start_time", "duration"}, exclude_none=True)
    state = update_action(body.state.to_domain(), action_id, **changes)
    return _response(state, action_id)


@router.post("/actions/{action_id}/remove", response_model=EditResponse)
def delete_action(action_id: str, body: RemoveActionRequest) -> EditResponse:
    return _response(remove_action(body.state.to_domain(), action_id))
