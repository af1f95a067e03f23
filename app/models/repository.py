"""
Repository identifier and derived MindsDB resource names.

A repository is addressed as ``owner/name``. The knowledge base, GitHub
database and agent created for it are named from that identifier, lower-cased,
so the same repository always maps to the same resources.
"""

import re
from dataclasses import dataclass

from app.exceptions import ValidationError

REPOSITORY_PATTERN = re.compile(r"^[^/]+/[^/]+$")
_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_]")


@dataclass(frozen=True)
class RepositoryIdentifier:
    """A validated ``owner/name`` repository reference."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def url(self) -> str:
        return f"https://github.com/{self.full_name}"

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class ResourceNames:
    """MindsDB resource names owned by one repository."""

    knowledge_base: str
    database: str
    agent: str


def parse_repository(value: str | None) -> RepositoryIdentifier:
    """
    Validate an ``owner/name`` string.

    Raises:
        ValidationError: if the value is empty or not exactly one ``owner/name`` pair
    """
    candidate = (value or "").strip()
    if not REPOSITORY_PATTERN.match(candidate):
        raise ValidationError("Invalid repository format. Expected: owner/repo")

    owner, name = candidate.split("/")
    return RepositoryIdentifier(owner=owner, name=name)


def normalize_identifier(repository: RepositoryIdentifier) -> str:
    """Lower-case the identifier and replace every non ``[a-z0-9_]`` character."""
    return _UNSAFE_CHARS.sub("_", repository.full_name.lower())


def resource_names(repository: RepositoryIdentifier) -> ResourceNames:
    slug = normalize_identifier(repository)
    return ResourceNames(
        knowledge_base=f"kb_{slug}",
        database=f"github_{slug}",
        agent=f"agent_{slug}",
    )
