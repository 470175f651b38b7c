"""/api/v1/parades — saved parade slots."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from paradesim.api.dependencies import get_store
from paradesim.api.schemas import ParadeStateSchema, ParadeSummary
from paradesim.utils.storage import ParadeStore

router = APIRouter()


@router.get("/parades", response_model=list[ParadeSummary])
def list_parades(store: ParadeStore = Depends(get_store)) -> list[ParadeSummary]:
    return [
        ParadeSummary(
            id=s.config.id,
            title=s.config.title,
            last_modified=s.config.last_modified,
            entity_count=len(s.entities),
            track_count=len(s.animation.tracks),
        )
        for s in store.list_saved()
    ]


@router.get("/parades/{parade_id}", response_model=ParadeStateSchema)
def get_parade(parade_id: str, store: ParadeStore = Depends(get_store)) -> ParadeStateSchema:
    return ParadeStateSchema.from_domain(store.load(parade_id))


@router.put("/parades", response_model=ParadeSummary)
def save_parade(body: ParadeStateSchema, store: ParadeStore = Depends(get_store)) -> ParadeSummary:
    state = body.to_domain()
    store.save(state)
    return ParadeSummary(
        id=state.config.id,
        title=state.config.title,
        last_modified=state.config.last_modified,
        entity_count=len(state.entities),
        track_count=len(state.animation.tracks),
    )


@router.delete("/parades/{parade_id}", status_code=204)
def delete_parade(parade_id: str, store: ParadeStore = Depends(get_store)) -> Response:
    store.delete(parade_id)
    return Response(status_code=204)
