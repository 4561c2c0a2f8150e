from fastapi import APIRouter, Depends
from modeler.core.dependencies import authorize_for_note, authorize_for_project, get_current_user
from modeler.core.permissions import ensure_permission
from modeler.database.dynamo_client import get_dynamo
from modeler.modules.notes.models import Note
from modeler.modules.notes.schemas import (
    CreateNoteRequest, CreateNoteResponse, UpdateNoteRequest, UpdateNoteResponse,
    GetNoteResponse, NoteItem
)
from modeler.modules.notes.service import NoteService
from modeler.modules.users.models import User
import uuid

router = APIRouter(prefix="/note", tags=["note"])


def get_note_service(dynamo=Depends(get_dynamo)) -> NoteService:
    return NoteService(dynamo)


@router.post("", response_model=CreateNoteResponse)
async def create_note(
    body: CreateNoteRequest,
    current_user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
    dynamo=Depends(get_dynamo)
):
    _, role = authorize_for_project(current_user.id, body.project_id, dynamo)
    ensure_permission(role, "notes:create")

    note_id = service.create_note(Note(id=str(uuid.uuid4()), **body.model_dump()))
    return CreateNoteResponse(success=True, note_id=note_id)


@router.get("/{note_id}", response_model=GetNoteResponse)
async def get_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    dynamo=Depends(get_dynamo)
):
    note, _ = authorize_for_note(current_user.id, note_id, dynamo)
    return GetNoteResponse(data=NoteItem(**note.model_dump()))


@router.put("/{note_id}", response_model=UpdateNoteResponse)
async def update_note(
    note_id: str,
    body: UpdateNoteRequest,
    current_user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
    dynamo=Depends(get_dynamo)
):
    note, role = authorize_for_note(current_user.id, note_id, dynamo)
    ensure_permission(role, "notes:update")

    service.create_note(note.model_copy(update=body.model_dump()))
    return UpdateNoteResponse(success=True)


@router.delete("/{note_id}", response_model=UpdateNoteResponse)
async def delete_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
    dynamo=Depends(get_dynamo)
):
    _, role = authorize_for_note(current_user.id, note_id, dynamo)
    ensure_permission(role, "notes:delete")

    service.delete_note_by_id(note_id)
    return UpdateNoteResponse(success=True)
