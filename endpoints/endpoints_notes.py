import logging

from fastapi import Request, APIRouter
from sqlalchemy import select, delete

from limiter import limiter
from auth import identityDep
from database import sessionDep
from exceptions import (
    AppError,
    InternalError,
    InvalidInputError,
    MissingFieldError,
    MissingQueryError,
    NoChangesError,
    NotFoundError,
)
from models.notesmodel import NotesModel
from constants import LIMIT_VALUE_NOTES, SCOPE_NOTES
from schemas.notesschema import (
    NoteSchema,
    CreateNoteSchema,
    EditNoteSchema,
    PinStatusSchema,
)

router_notes = APIRouter(tags=["Notes"])
logger = logging.getLogger("notes.notes")


def dump_note(note: NotesModel) -> dict:
    return NoteSchema.model_validate(note).model_dump(mode="json", by_alias=True)


def note_matches(note: NotesModel, query: str) -> bool:
    needle = query.casefold()
    if needle in note.title.casefold() or needle in note.content.casefold():
        return True
    return any(needle in tag.casefold() for tag in note.tags or [])


async def get_owned_note(session, note_id: str, user_id: str) -> NotesModel | None:
    # every lookup is scoped by owner, a foreign note id behaves like a missing one
    query = select(NotesModel).where(
        NotesModel.id == note_id, NotesModel.user_id == user_id
    )
    result = await session.execute(query)
    return result.scalar_one_or_none()


@router_notes.post(
    "/add-note",
    status_code=201,
    description="Accepts title, content and optional tags with a bearer access token. Returns the created note",
    summary="Create new note",
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def add_note(
    createNote: CreateNoteSchema,
    request: Request,
    session: sessionDep,
    identity: identityDep,
):
    if not createNote.title or not createNote.content:
        raise MissingFieldError("Title and content are required.")

    try:
        new_note = NotesModel(
            user_id=identity["id"],
            title=createNote.title,
            content=createNote.content,
            tags=createNote.tags or [],
            is_pinned=False,
        )
        session.add(new_note)
        await session.commit()
        await session.refresh(new_note)

        return {
            "error": False,
            "note": dump_note(new_note),
            "message": "Note created successfully.",
        }
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Add note]")

        raise InternalError() from e


@router_notes.put(
    "/edit-note/{noteId}",
    description="Accepts any of title, content, tags, isPinned with a bearer access token. Only non-empty fields are applied",
    summary="Update note",
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def edit_note(
    noteId: str,
    editNote: EditNoteSchema,
    request: Request,
    session: sessionDep,
    identity: identityDep,
):
    # an empty tags list is still a change, empty strings and isPinned are not
    if not editNote.title and not editNote.content and editNote.tags is None:
        raise NoChangesError()

    try:
        note = await get_owned_note(session, noteId, identity["id"])

        if note is None:
            raise NotFoundError("Note not found.")

        if editNote.title:
            note.title = editNote.title
        if editNote.content:
            note.content = editNote.content
        if editNote.tags is not None:
            note.tags = list(editNote.tags)
        if editNote.is_pinned:
            note.is_pinned = True

        await session.commit()
        await session.refresh(note)

        return {
            "error": False,
            "note": dump_note(note),
            "message": "Note updated successfully.",
        }
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Edit note]")

        raise InternalError() from e


@router_notes.get(
    "/get-all-notes",
    description="Accepts bearer access token. Returns every note of the user, 404 if there are none",
    summary="Get notes",
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def get_all_notes(request: Request, session: sessionDep, identity: identityDep):
    try:
        query = select(NotesModel).where(NotesModel.user_id == identity["id"])
        result = await session.execute(query)
        notes = result.scalars().all()

        if not notes:
            raise NotFoundError("No notes found.")

        return {
            "error": False,
            "notes": [dump_note(note) for note in notes],
            "message": "Notes fetched successfully.",
        }
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Get all notes]")

        raise InternalError() from e


@router_notes.delete(
    "/delete-note/{noteId}",
    description="Accepts note id and bearer access token. Deletes the note if the user owns it",
    summary="Delete note",
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def delete_note(
    noteId: str, request: Request, session: sessionDep, identity: identityDep
):
    try:
        note = await get_owned_note(session, noteId, identity["id"])

        if note is None:
            raise NotFoundError("Note not found.")

        query = delete(NotesModel).where(
            NotesModel.id == noteId, NotesModel.user_id == identity["id"]
        )
        await session.execute(query)
        await session.commit()

        return {"error": False, "message": "Note deleted successfully."}
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Delete note]")

        raise InternalError() from e


@router_notes.get(
    "/get-pinned-notes",
    description="Accepts bearer access token. Returns the pinned notes of the user, 404 if there are none",
    summary="Get pinned notes",
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def get_pinned_notes(
    request: Request, session: sessionDep, identity: identityDep
):
    try:
        query = select(NotesModel).where(
            NotesModel.user_id == identity["id"], NotesModel.is_pinned.is_(True)
        )
        result = await session.execute(query)
        notes = result.scalars().all()

        if not notes:
            raise NotFoundError("No pinned notes found.")

        return {
            "error": False,
            "notes": [dump_note(note) for note in notes],
            "message": "Pinned notes fetched successfully.",
        }
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Get pinned notes]")

        raise InternalError() from e


@router_notes.put(
    "/update-pin-status/{noteId}",
    description="Accepts boolean isPinned and bearer access token. Pins or unpins the note",
    summary="Update pin status",
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def update_pin_status(
    noteId: str,
    pinStatus: PinStatusSchema,
    request: Request,
    session: sessionDep,
    identity: identityDep,
):
    is_pinned = pinStatus.is_pinned
    if not isinstance(is_pinned, bool):
        raise InvalidInputError("Invalid value for isPinned. It must be a boolean.")

    try:
        note = await get_owned_note(session, noteId, identity["id"])

        if note is None:
            raise NotFoundError("Note not found.")

        note.is_pinned = is_pinned
        await session.commit()
        await session.refresh(note)

        return {
            "error": False,
            "note": dump_note(note),
            "message": f"Note {'pinned' if is_pinned else 'unpinned'} successfully.",
        }
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Update pin status]")

        raise InternalError() from e


@router_notes.get(
    "/search-notes",
    description="Accepts query string and bearer access token. Returns notes whose title, content or tags contain the query, ignoring case",
    summary="Search notes",
)
@limiter.shared_limit(LIMIT_VALUE_NOTES, SCOPE_NOTES)
async def search_notes(
    request: Request,
    session: sessionDep,
    identity: identityDep,
    query: str | None = None,
):
    if not query:
        raise MissingQueryError()

    try:
        statement = select(NotesModel).where(NotesModel.user_id == identity["id"])
        result = await session.execute(statement)
        notes = [note for note in result.scalars().all() if note_matches(note, query)]

        return {
            "error": False,
            "notes": [dump_note(note) for note in notes],
            "message": "Notes retrieved successfully.",
        }
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Search notes]")

        raise InternalError() from e
