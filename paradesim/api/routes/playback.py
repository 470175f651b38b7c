"""/api/v1/playback — server-side playback clock controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from paradesim.api.dependencies import get_clock
from paradesim.api.schemas import (
    ControlResponse,
    EventSchema,
    FrameResponse,
    ParadeStateSchema,
    PlaybackResponse,
    PlaybackStatus,
)
from paradesim.engine.playback import Frame, PlaybackClock

router = APIRouter()


class PlaybackAction(str, Enum):
    play = "play"
    pause = "pause"
    resume = "resume"
    stop = "stop"


def _status(clock: PlaybackClock) -> PlaybackStatus:
    return PlaybackStatus(
        loaded=clock.loaded,
        running=clock.running,
        playing=clock.playing,
        finished=clock.finished,
        time=clock.time,
        duration=clock.duration,
    )


def _frame(frame: Frame | None) -> FrameResponse | None:
    if frame is None:
        return None
    return FrameResponse.from_snapshot(frame.time, frame.snapshot, frame.digest)


@router.get("/playback", response_model=PlaybackResponse)
def get_playback(clock: PlaybackClock = Depends(get_clock)) -> PlaybackResponse:
    if not clock.loaded:
        raise HTTPException(status_code=503, detail="No parade loaded.")
    return PlaybackResponse(status=_status(clock), frame=_frame(clock.get_frame()))


@router.post("/playback/load", response_model=PlaybackResponse)
def load_parade(
    body: ParadeStateSchema,
    clock: PlaybackClock = Depends(get_clock),
) -> PlaybackResponse:
    frame = clock.load(body.to_domain())
    return PlaybackResponse(status=_status(clock), frame=_frame(frame))


@router.post("/playback/seek", response_model=PlaybackResponse)
def seek(
    time: float = Query(..., ge=0.0, description="Timeline time in seconds"),
    clock: PlaybackClock = Depends(get_clock),
) -> PlaybackResponse:
    frame = clock.seek(time)
    return PlaybackResponse(status=_status(clock), frame=_frame(frame))


@router.get("/playback/preview", response_model=FrameResponse)
def preview(
    time: float = Query(..., ge=0.0, description="Timeline time in seconds"),
    clock: PlaybackClock = Depends(get_clock),
) -> FrameResponse:
    """Scrub preview: evaluate *time* without moving the playhead."""
    frame = clock.frame_at(time)
    return FrameResponse.from_snapshot(frame.time, frame.snapshot, frame.digest)


@router.get("/playback/events", response_model=list[EventSchema])
def get_events(
    since: int = Query(0, ge=0, description="Return events with seq >= since"),
    clock: PlaybackClock = Depends(get_clock),
) -> list[EventSchema]:
    return [
        EventSchema(seq=e.seq, category=e.category, message=e.message, time=e.timeline_time)
        for e in clock.event_log.since(since)
    ]


@router.post("/playback/{action}", response_model=ControlResponse)
def control(
    action: PlaybackAction,
    clock: PlaybackClock = Depends(get_clock),
) -> ControlResponse:
    match action:
        case PlaybackAction.play:
            if clock.playing:
                return ControlResponse(status="noop", message="Already playing.", time=clock.time)
            clock.play()
            return ControlResponse(status="ok", message="Playback started.", time=clock.time)

        case PlaybackAction.pause:
            if not clock.playing:
                return ControlResponse(status="noop", message="Not playing.", time=clock.time)
            clock.pause()
            return ControlResponse(status="ok", message="Playback paused.", time=clock.time)

        case PlaybackAction.resume:
            if clock.playing:
                return ControlResponse(status="noop", message="Already playing.", time=clock.time)
            clock.resume()
            if not clock.playing:
                return ControlResponse(status="error", message="At end of timeline.", time=clock.time)
            return ControlResponse(status="ok", message="Playback resumed.", time=clock.time)

        case PlaybackAction.stop:
            clock.pause()
            frame = clock.seek(0.0)
            return ControlResponse(status="ok", message="Playback stopped.", time=frame.time)
