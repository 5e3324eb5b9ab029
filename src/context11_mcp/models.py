"""Wire models for the Context11 REST API."""

from __future__ import annotations

from typing import TypedDict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    # The API speaks camelCase.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchResult(_ApiModel):
    score: float
    document_id: str
    folder_id: str | None = None
    title: str
    preview: str = ""
    chunk_index: int | None = None


class SearchResponse(_ApiModel):
    results: list[SearchResult]


class Document(_ApiModel):
    id: str
    title: str
    content: str | None = None
    folder_id: str | None = None
    folder_name: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class Folder(_ApiModel):
    id: str
    name: str
    parent_id: str | None = None
    document_count: int = 0
    child_folder_count: int = 0


class FoldersResponse(_ApiModel):
    folders: list[Folder]


class FolderRef(_ApiModel):
    id: str
    name: str


class FolderDocument(_ApiModel):
    id: str
    title: str
    created_at: str | None = None
    updated_at: str | None = None


class FolderDocumentsResponse(_ApiModel):
    folder: FolderRef
    documents: list[FolderDocument]


class RichTextNode(TypedDict, total=False):
    """One node of a Tiptap document tree."""

    type: str
    text: str
    content: list[RichTextNode]
