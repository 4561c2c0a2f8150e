from pydantic import BaseModel
from typing import List


class CreateNoteRequest(BaseModel):
    project_id: str
    content: str = ""
    x: str = "0"
    y: str = "0"


class CreateNoteResponse(BaseModel):
    success: bool = False
    note_id: str = ""


class UpdateNoteRequest(BaseModel):
    content: str = ""
    x: str = "0"
    y: str = "0"


class UpdateNoteResponse(BaseModel):
    success: bool = False


class NoteItem(BaseModel):
    id: str
    project_id: str
    content: str
    x: str = "0"
    y: str = "0"


class GetNoteResponse(BaseModel):
    data: NoteItem


class NoteListResponse(BaseModel):
    list: List[NoteItem]
