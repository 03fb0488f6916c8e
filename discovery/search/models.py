from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class FileType(str, Enum):
    """Broad category of a file, derived from its MIME type."""

    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    EXECUTABLE = "executable"
    DOCUMENT = "document"
    OTHER = "other"

    @property
    def ranking(self) -> int:
        return list(FileType).index(self)

    @classmethod
    def from_mime_type(cls, mime_type: str | None) -> "FileType":
        if not mime_type:
            return cls.OTHER
        mime = mime_type.lower()
        if mime.startswith("image/"):
            return cls.IMAGE
        if mime.startswith("audio/"):
            return cls.AUDIO
        if mime.startswith("video/"):
            return cls.VIDEO
        if mime in _EXECUTABLE_MIME_TYPES:
            return cls.EXECUTABLE
        if mime.startswith("text/") or mime in _DOCUMENT_MIME_TYPES:
            return cls.DOCUMENT
        return cls.OTHER


_EXECUTABLE_MIME_TYPES = frozenset(
    {
        "application/x-msdownload",
        "application/x-dosexec",
        "application/x-executable",
        "application/x-sharedlib",
        "application/x-mach-binary",
        "application/x-bat",
    }
)

_DOCUMENT_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/rtf",
        "application/msword",
        "application/vnd.ms-excel",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "application/vnd.oasis.opendocument.text",
        "application/xhtml+xml",
    }
)

_KB = 1024
_MB = 1024 * _KB
_GB = 1024 * _MB


class FileSize(Enum):
    """Size buckets used for filtering and grouping, largest first."""

    XXLARGE = (1 * _GB, "XXLarge: 1GB+")
    XLARGE = (200 * _MB, "XLarge: 200MB-1GB")
    LARGE = (50 * _MB, "Large: 50-200MB")
    MEDIUM = (1 * _MB, "Medium: 1-50MB")
    SMALL = (100 * _KB, "Small: 100KB-1MB")
    XSMALL = (16 * _KB, "XSmall: 16-100KB")
    XXSMALL = (0, "XXSmall: 0-16KB")

    def __init__(self, min_bytes: int, label: str) -> None:
        self.min_bytes = min_bytes
        self.label = label

    @property
    def ranking(self) -> int:
        return list(FileSize).index(self)

    @classmethod
    def from_size(cls, size: int | None) -> "FileSize | None":
        """Return the bucket for a byte count, or None for unknown/negative sizes."""
        if size is None or size < 0:
            return None
        for bucket in cls:
            if size >= bucket.min_bytes:
                return bucket
        return None


class KnownStatus(str, Enum):
    UNKNOWN = "unknown"
    KNOWN = "known"
    NOTABLE = "notable"

    @classmethod
    def parse(cls, value: str | None) -> "KnownStatus":
        """Map a stored status string to a KnownStatus; unrecognized values are UNKNOWN."""
        try:
            return cls(value.lower()) if value else cls.UNKNOWN
        except ValueError:
            return cls.UNKNOWN


class Frequency(Enum):
    """Cross-case frequency buckets, rarest first."""

    UNIQUE = (1, "Unique (1)")
    RARE = (10, "Rare (2-10)")
    COMMON = (100, "Common (11-100)")
    VERY_COMMON = (None, "Very Common (100+)")
    KNOWN = (None, "Known (NSRL)")
    UNKNOWN = (None, "Unknown")

    def __init__(self, max_occurrences: int | None, label: str) -> None:
        self.max_occurrences = max_occurrences
        self.label = label

    @property
    def ranking(self) -> int:
        return list(Frequency).index(self)

    @classmethod
    def from_count(cls, count: int) -> "Frequency":
        if count <= cls.UNIQUE.max_occurrences:
            return cls.UNIQUE
        if count <= cls.RARE.max_occurrences:
            return cls.RARE
        if count <= cls.COMMON.max_occurrences:
            return cls.COMMON
        return cls.VERY_COMMON


@dataclass(frozen=True)
class CorrelationResult:
    """Central repository answer for one content hash."""

    frequency_count: int
    known_status: KnownStatus = KnownStatus.UNKNOWN

    @property
    def frequency(self) -> Frequency:
        if self.known_status is KnownStatus.KNOWN:
            return Frequency.KNOWN
        return Frequency.from_count(self.frequency_count)


@dataclass(slots=True)
class ResultFile:
    """One file metadata record from the corpus.

    Only `correlation` changes after creation, through attach_correlation().
    """

    object_id: int
    name: str
    parent_path: str = "/"
    size: int | None = None
    mime_type: str | None = None
    file_type: FileType = FileType.OTHER
    md5: str | None = None
    data_source_id: int | None = None
    data_source_name: str | None = None
    modified_time: datetime | None = None
    created_time: datetime | None = None
    known_status: KnownStatus = KnownStatus.UNKNOWN
    hash_set_names: tuple[str, ...] = ()
    interesting_item_sets: tuple[str, ...] = ()
    tag_names: tuple[str, ...] = ()
    owner: str | None = None
    correlation: CorrelationResult | None = field(default=None, compare=False)
    correlation_checked: bool = field(default=False, compare=False)

    @property
    def full_path(self) -> str:
        parent = self.parent_path or "/"
        if not parent.endswith("/"):
            parent += "/"
        return parent + self.name

    @property
    def frequency(self) -> Frequency:
        if self.correlation is None:
            return Frequency.UNKNOWN
        return self.correlation.frequency

    @property
    def frequency_count(self) -> int | None:
        if self.correlation is None:
            return None
        return self.correlation.frequency_count

    def attach_correlation(self, correlation: CorrelationResult | None) -> None:
        self.correlation = correlation
        self.correlation_checked = True
