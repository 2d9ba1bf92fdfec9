"""
Pure transitions over the open-document collection.

Each function takes the current ``DocumentCollection`` plus an input and
returns a ``Transition`` holding the next collection and the effects the
document manager must perform. Nothing here touches Qt or the file system.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from niti.domain.effects import ChooseSaveLocation, Notify, ReadFile, WriteFile
from niti.domain.models import Document, DocumentCollection, Notice, NoticeLevel, Transition


def _notify(level: NoticeLevel, title: str, text: str = "") -> Notify:
    return Notify(Notice(level, title, text))


def ensure_extension(path: Path, ext: str) -> Path:
    """Append ``.ext`` when the chosen file name carries no suffix."""
    ext = ext.lstrip(".")
    if not ext or path.suffix:
        return path
    return path.with_name(f"{path.name}.{ext}")


def _append(state: DocumentCollection, path: Path | None, text: str) -> DocumentCollection:
    doc = Document(path=path, text=text, saved_text=text, uid=state.next_uid)
    docs = (*state.documents, doc)
    return DocumentCollection(docs, len(docs) - 1, state.next_uid + 1)


def create_document(state: DocumentCollection, content: str = "") -> Transition:
    return Transition(_append(state, None, content))


def request_open(state: DocumentCollection, path: Path) -> Transition:
    return Transition(state, (ReadFile(path),))


def open_succeeded(state: DocumentCollection, path: Path, text: str) -> Transition:
    return Transition(
        _append(state, path, text),
        (_notify(NoticeLevel.SUCCESS, "File Opened", str(path)),),
    )


def open_failed(state: DocumentCollection, path: Path, error: str) -> Transition:
    return Transition(
        state,
        (_notify(NoticeLevel.ERROR, "Open Error", f"Failed to open {path}:\n{error}"),),
    )


def update_content(state: DocumentCollection, index: int, text: str) -> Transition:
    if not state.in_range(index):
        return Transition(state)
    doc = state.documents[index]
    if doc.text == text:
        return Transition(state)
    return Transition(state.with_document(index, replace(doc, text=text)))


def request_save(state: DocumentCollection, index: int) -> Transition:
    if not state.in_range(index):
        return Transition(
            state, (_notify(NoticeLevel.WARNING, "Save", "There is no document to save."),)
        )
    doc = state.documents[index]
    if doc.path is None:
        return Transition(state, (ChooseSaveLocation(index),))
    return Transition(state, (WriteFile(doc.uid, doc.path, doc.text),))


def save_location_chosen(
    state: DocumentCollection, index: int, path: Path | None, default_ext: str
) -> Transition:
    # Cancelled dialog or a tab closed while the dialog was open: silent abort.
    if path is None or not state.in_range(index):
        return Transition(state)
    path = ensure_extension(path, default_ext)
    doc = state.documents[index]
    state = state.with_document(index, replace(doc, path=path))
    return Transition(state, (WriteFile(doc.uid, path, doc.text),))


def save_succeeded(state: DocumentCollection, uid: int, path: Path, text: str) -> Transition:
    done = _notify(NoticeLevel.SUCCESS, "File Saved", str(path))
    index = state.index_of(uid)
    # Closed during the write, or re-targeted by a later Save As.
    if index < 0 or state.documents[index].path != path:
        return Transition(state, (done,))
    doc = state.documents[index]
    return Transition(state.with_document(index, replace(doc, saved_text=text)), (done,))


def save_failed(state: DocumentCollection, uid: int, path: Path, error: str) -> Transition:
    return Transition(
        state,
        (_notify(NoticeLevel.ERROR, "Save Failed", f"Failed to save {path}:\n{error}"),),
    )


def close_document(state: DocumentCollection, index: int) -> Transition:
    if not state.in_range(index):
        return Transition(state)
    docs = state.documents[:index] + state.documents[index + 1 :]
    if not docs:
        return Transition(DocumentCollection(next_uid=state.next_uid))
    active = state.active_index
    if index == active:
        active = max(0, index - 1)
    elif index < active:
        active -= 1
    return Transition(replace(state, documents=docs, active_index=active))


def set_active(state: DocumentCollection, index: int) -> Transition:
    if not state.in_range(index) or index == state.active_index:
        return Transition(state)
    return Transition(replace(state, active_index=index))
