from fastapi import HTTPException
from modeler.database.dynamo_client import scan_all
from modeler.modules.notes.models import Note
from typing import List


class NoteService:
    def __init__(self, dynamo):
        self.table = dynamo.Table(Note.TABLE_NAME)

    def create_note(self, note: Note) -> str:
        self.table.put_item(Item=note.to_item())
        return note.id

    def get_note_by_id(self, note_id: str) -> Note:
        result = self.table.get_item(Key={"id": note_id})
        if "Item" not in result:
            raise HTTPException(status_code=404, detail="Note not found")
        return Note.from_item(result["Item"])

    def delete_note_by_id(self, note_id: str) -> None:
        result = self.table.delete_item(Key={"id": note_id}, ReturnValues="ALL_OLD")
        if "Attributes" not in result:
            raise HTTPException(status_code=404, detail="Note not found")

    def list_notes_by_project_id(self, project_id: str) -> List[Note]:
        return [Note.from_item(item) for item in scan_all(self.table, "project_id", project_id)]
