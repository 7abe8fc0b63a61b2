"""Schemas for the partition catalog."""

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PartitionKey(NamedTuple):
    """(module id, topic) key identifying one partition."""

    module_id: str
    topic: str

    def __str__(self) -> str:
        return f"{self.module_id}/{self.topic}"


class TopicEntry(BaseModel):
    """One topic of a module, backed by a question file."""

    id: str = Field(..., description="Topic key stored on questions", min_length=1, max_length=50)
    name: str = Field(..., description="Display name", min_length=1)
    description: str = Field("", description="Topic description")
    file: str = Field(..., description="Question file, relative to the questions directory", min_length=1)

    model_config = ConfigDict(extra="forbid")


class ModuleEntry(BaseModel):
    """A learning module grouping several topics."""

    id: str = Field(..., description="Module key stored on questions", min_length=1, max_length=50)
    name: str = Field(..., description="Display name", min_length=1)
    description: str = Field("", description="Module description")
    is_premium: bool = Field(False, description="Whether the module is behind the paywall")
    topics: list[TopicEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class CatalogEntry(BaseModel):
    """Flattened (module, topic) entry used by the seeder."""

    module_id: str
    topic: str
    file: str
    module_name: str
    topic_name: str

    @property
    def key(self) -> PartitionKey:
        return PartitionKey(self.module_id, self.topic)


class Catalog(BaseModel):
    """All valid partitions, as configuration data."""

    modules: list[ModuleEntry]

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_unique(self) -> "Catalog":
        module_ids: set[str] = set()
        topic_ids: set[str] = set()
        for module in self.modules:
            if module.id in module_ids:
                raise ValueError(f"Duplicate module id: {module.id}")
            module_ids.add(module.id)
            for topic in module.topics:
                if topic.id.lower() in topic_ids:
                    raise ValueError(f"Duplicate topic id: {topic.id}")
                topic_ids.add(topic.id.lower())
        return self

    def entries(self) -> list[CatalogEntry]:
        """All partitions in catalog order."""
        return [
            CatalogEntry(
                module_id=module.id,
                topic=topic.id,
                file=topic.file,
                module_name=module.name,
                topic_name=topic.name,
            )
            for module in self.modules
            for topic in module.topics
        ]

    def keys(self) -> set[PartitionKey]:
        return {entry.key for entry in self.entries()}

    def contains(self, module_id: str, topic: str) -> bool:
        return PartitionKey(module_id, topic) in self.keys()

    def get_module(self, module_id: str) -> ModuleEntry | None:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    def resolve(self, selector: str) -> list[CatalogEntry]:
        """Resolve a CLI selector to catalog entries.

        A topic id selects that partition, a module id selects all of the
        module's topics. Matching is case-insensitive. Returns an empty list
        when nothing matches.
        """
        wanted = selector.strip().lower()
        entries = self.entries()
        by_topic = [entry for entry in entries if entry.topic.lower() == wanted]
        if by_topic:
            return by_topic
        return [entry for entry in entries if entry.module_id.lower() == wanted]

    def available(self) -> list[str]:
        """Human-readable list of partitions, for error messages."""
        return [str(entry.key) for entry in self.entries()]
