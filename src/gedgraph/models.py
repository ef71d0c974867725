"""Data classes for the normalized family model and the relationship graph."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"
    OTHER = "other"


class DateQualifier(str, Enum):
    CIRCA = "circa"
    ESTIMATED = "estimated"
    BEFORE = "before"
    AFTER = "after"
    CALCULATED = "calendar-exact"


class SiblingKind(str, Enum):
    FULL = "full"
    HALF = "half"
    STEP = "step"


@dataclass
class DateInfo:
    day: int | None = None
    month: int | None = None  # 1-12, 0 when the month text was not recognized
    year: int | None = None
    text: str | None = None  # verbatim source rendering
    qualifier: DateQualifier | None = None


@dataclass
class LifeEvent:
    date: DateInfo | None = None
    place: str | None = None
    confirmed: bool | None = None
    type: str | None = None  # "baptism", "burial", ... for auxiliary events
    notes: list[str] = field(default_factory=list)


@dataclass
class ProfileImage:
    url: str
    title: str | None = None
    thumbnail: str | None = None


@dataclass
class Profile:
    id: str
    first_name: str | None = None
    last_name: str | None = None
    maiden_name: str | None = None
    sex: Sex | None = None
    famc: str | None = None
    fams: list[str] = field(default_factory=list)
    birth: LifeEvent | None = None
    death: LifeEvent | None = None
    events: list[LifeEvent] = field(default_factory=list)
    images: list[ProfileImage] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    restricted: bool = False

    @property
    def full_name(self) -> str:
        parts = [p for p in [self.first_name, self.last_name] if p]
        return " ".join(parts) if parts else "Unknown"


@dataclass
class Family:
    id: str
    husb: str | None = None
    wife: str | None = None
    children: list[str] = field(default_factory=list)
    marriage: LifeEvent | None = None
    divorce: LifeEvent | None = None
    notes: list[str] = field(default_factory=list)


@dataclass
class SourceMetadata:
    source: str | None = None
    version: str | None = None
    creator: str | None = None
    created: datetime | str | None = None


@dataclass
class FamilyData:
    """
    The normalized family model every parser or adapter produces.

    Profile and family ids must be unique within their own list. Ids are opaque
    and compared exactly, so "@I1@" and "I1" are different records.
    """

    individuals: list[Profile] = field(default_factory=list)
    families: list[Family] = field(default_factory=list)
    metadata: SourceMetadata | None = None


@dataclass
class SpouseLink:
    spouse_id: str
    family_id: str


@dataclass
class ChildLink:
    child_id: str
    family_id: str


@dataclass
class SiblingLink:
    sibling_id: str
    relationship: SiblingKind = SiblingKind.FULL


@dataclass
class ProfileNode:
    profile: Profile
    parents: tuple[str, ...] = ()  # (husb, wife) of the famc family, missing sides dropped
    spouses: list[SpouseLink] = field(default_factory=list)
    children: list[ChildLink] = field(default_factory=list)
    siblings: list[SiblingLink] = field(default_factory=list)


@dataclass
class RelationshipGraph:
    individuals: dict[str, ProfileNode] = field(default_factory=dict)
    families: dict[str, Family] = field(default_factory=dict)


@dataclass
class ImmediateFamily:
    parents: list[Profile] = field(default_factory=list)
    spouses: list[Profile] = field(default_factory=list)
    children: list[Profile] = field(default_factory=list)
    siblings: list[Profile] = field(default_factory=list)


def restricted_profile(profile_id: str) -> Profile:
    """Placeholder for a record the source would not disclose, so pointers to it still resolve."""
    return Profile(id=profile_id, sex=Sex.UNSPECIFIED, restricted=True)
