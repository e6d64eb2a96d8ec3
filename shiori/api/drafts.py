"""Editor draft autosave endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shiori.api.dependencies import get_draft_store, get_session_identity
from shiori.database import get_db
from shiori.errors import NotFound
from shiori.schemas.base import SuccessResponse
from shiori.schemas.draft import Draft
from shiori.services.authorization import SessionIdentity, require_admin
from shiori.services.drafts import DraftStore

router = APIRouter(prefix="/api/drafts", tags=["drafts"])


def require_editor(
    identity: Annotated[SessionIdentity | None, Depends(get_session_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> SessionIdentity:
    """Only admins write posts, so only admins keep drafts."""
    require_admin(db, identity)
    return identity


@router.get("", response_model=Draft)
def get_draft(
    editor: Annotated[SessionIdentity, Depends(require_editor)],
    store: Annotated[DraftStore, Depends(get_draft_store)],
):
    """Get the caller's saved draft."""
    draft = store.load(editor.email)
    if draft is None:
        raise NotFound("No saved draft")
    return draft


@router.put("", response_model=Draft)
def save_draft(
    draft: Draft,
    editor: Annotated[SessionIdentity, Depends(require_editor)],
    store: Annotated[DraftStore, Depends(get_draft_store)],
):
    """Replace the caller's draft; the editor calls this on a debounce timer."""
    return store.save(editor.email, draft)


@router.delete("", response_model=SuccessResponse)
def clear_draft(
    editor: Annotated[SessionIdentity, Depends(require_editor)],
    store: Annotated[DraftStore, Depends(get_draft_store)],
):
    """Discard the caller's draft, e.g. after publishing."""
    store.clear(editor.email)
    return SuccessResponse(success=True)
