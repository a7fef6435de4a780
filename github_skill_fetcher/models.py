"""Data models and constants for skill retrieval."""

from dataclasses import asdict, dataclass, field

MAX_SKILL_IDS = 10  # per get-details request
FUZZY_MATCH_THRESHOLD = 0.30
SUBSTRING_BONUS = 0.5
SKILL_MANIFEST = "skill.md"  # compared case-insensitively


class InvalidSkillIdError(ValueError):
    """Composite skill ID has fewer than 3 segments."""


@dataclass(frozen=True)
class SkillReference:
    """Parsed `owner/repo/skillId`; skill_id may itself contain slashes."""

    repo_owner: str
    repo_name: str
    skill_id: str

    @classmethod
    def parse(cls, composite_id: str) -> "SkillReference":
        parts = composite_id.split("/")
        if len(parts) < 3:
            raise InvalidSkillIdError(
                f'Invalid skill ID format. Expected "owner/repo/skillId", got "{composite_id}"'
            )
        return cls(parts[0], parts[1], "/".join(parts[2:]))

    @property
    def source(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"


@dataclass(frozen=True)
class TreeEntry:
    """One entry of a recursive git tree listing."""

    path: str
    kind: str  # "tree" or "blob"

    @property
    def is_dir(self) -> bool:
        return self.kind == "tree"


@dataclass
class TreeListing:
    """Result of a tree fetch: entries, or an error message."""

    entries: list[TreeEntry] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class ContentEntry:
    """One child of a directory from the contents endpoint."""

    type: str  # "file", "dir", "symlink", "submodule"
    path: str
    name: str
    download_url: str | None = None

    @classmethod
    def from_api(cls, item: dict) -> "ContentEntry":
        return cls(
            type=item.get("type") or "",
            path=item.get("path") or "",
            name=item.get("name") or "",
            download_url=item.get("download_url"),
        )


@dataclass(frozen=True)
class FolderMatch:
    """Resolved skill folder. Exactly one of folder_path / reason is set."""

    folder_path: str | None = None
    reason: str | None = None

    def __post_init__(self):
        if (self.folder_path is None) == (self.reason is None):
            raise ValueError("FolderMatch needs exactly one of folder_path or reason")

    @classmethod
    def found(cls, folder_path: str) -> "FolderMatch":
        return cls(folder_path=folder_path)

    @classmethod
    def failed(cls, reason: str) -> "FolderMatch":
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.folder_path is not None


@dataclass(frozen=True)
class FileRecord:
    path: str
    name: str
    content: str


@dataclass
class SkillDetailResult:
    """One result per requested skill ID: files, or an error."""

    id: str
    files: list[FileRecord] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SearchResult:
    id: str
    name: str
    source: str
    installs: int


@dataclass
class SearchResults:
    query: str
    total: int
    skills: list[SearchResult]

    def to_dict(self) -> dict:
        return asdict(self)
