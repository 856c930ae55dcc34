from .note_store import NoteSnapshot, NoteStore

__all__ = ["NoteSnapshot", "NoteStore"]
