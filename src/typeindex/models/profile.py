from __future__ import annotations

import httpx
from pydantic import BaseModel, ConfigDict, model_validator
from rdflib import Graph


class TypeIndexState(BaseModel):
    """One index slot of a profile.

    ``uri`` is set once the index document exists and is linked from the
    profile; ``graph`` once that document has been fetched and parsed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    uri: str | None = None
    graph: Graph | None = None

    @model_validator(mode="after")
    def validate_graph_has_uri(self) -> TypeIndexState:
        if self.graph is not None and self.uri is None:
            raise ValueError("type index graph set without a type index uri")
        return self

    def with_graph(self, graph: Graph | None) -> TypeIndexState:
        return TypeIndexState(uri=self.uri, graph=graph)


class Profile(BaseModel):
    """The parts of a WebID profile the type index registry reads and writes.

    Instances are immutable: every registry operation returns a new Profile
    and callers thread it forward. Graphs held by a profile are never
    mutated in place either.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    web_id: str
    preferences_uri: str | None = None  # separate preferences document, if any
    is_loaded: bool = False
    listed: TypeIndexState = TypeIndexState()
    unlisted: TypeIndexState = TypeIndexState()

    @property
    def document_uri(self) -> str:
        """The profile document URL (web id without its fragment)."""
        return str(httpx.URL(self.web_id).copy_with(fragment=None))

    def index(self, is_listed: bool) -> TypeIndexState:
        return self.listed if is_listed else self.unlisted

    def with_index(self, is_listed: bool, state: TypeIndexState) -> Profile:
        field = "listed" if is_listed else "unlisted"
        return self.model_copy(update={field: state})

    def with_index_graph(self, uri: str, graph: Graph) -> Profile:
        """Attach a loaded graph to whichever slot has ``uri``.

        A URI matching neither slot leaves the profile unchanged.
        """
        profile = self
        if self.listed.uri == uri:
            profile = profile.with_index(True, self.listed.with_graph(graph))
        if self.unlisted.uri == uri:
            profile = profile.with_index(False, self.unlisted.with_graph(graph))
        return profile

    def without_index_graphs(self) -> Profile:
        return self.model_copy(
            update={
                "listed": self.listed.with_graph(None),
                "unlisted": self.unlisted.with_graph(None),
            }
        )
