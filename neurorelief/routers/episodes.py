"""
Migraine Episodes API
Log, list and amend migraine episodes for the authenticated user
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from neurorelief.core.error_handling import internal_errors
from neurorelief.dependencies import AuthContext, get_auth_context, get_storage
from neurorelief.schemas.episode import EpisodeCreate, EpisodeResponse, EpisodeUpdate
from neurorelief.services.storage import DatabaseStorage

router = APIRouter(prefix="/api/episodes", tags=["Episodes"])


@router.post("", response_model=EpisodeResponse)
def create_episode(
    episode: EpisodeCreate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    """Start time defaults to now when the client omits it."""
    with internal_errors("create episode"):
        return storage.create_episode(auth.user_id, episode.to_record())


@router.get("", response_model=List[EpisodeResponse])
def list_episodes(
    limit: Optional[int] = Query(None, ge=1, le=500),
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    with internal_errors("fetch episodes"):
        return storage.get_episodes(auth.user_id, limit)


@router.patch("/{episode_id}", response_model=EpisodeResponse)
def update_episode(
    episode_id: int,
    updates: EpisodeUpdate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage)
):
    """
    Partial update, typically to close an episode with its end time.
    The start/end ordering is checked against the stored record in the same transaction.
    """
    with internal_errors("update episode"):
        return storage.update_episode(auth.user_id, episode_id, updates.to_record(partial=True))
