"""GEDCOM parsing: record tree into the normalized family model, plus name, sex and date handling."""

from pathlib import Path
import logging
import re

from ged4py.date import DateValue, DateValueTypes

from gedgraph.models import (
    DateInfo,
    DateQualifier,
    Family,
    FamilyData,
    LifeEvent,
    Profile,
    ProfileImage,
    Sex,
    SourceMetadata,
)
from gedgraph.records import RecordNode, parse_records

logger = logging.getLogger("gedgraph.parsing")


class ParseError(Exception):
    """The GEDCOM source could not be read or decoded."""


MONTH_MAP = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

# ged4py date kinds that carry a qualifier we keep
QUALIFIER_MAP = {
    DateValueTypes.ABOUT: DateQualifier.CIRCA,
    DateValueTypes.ESTIMATED: DateQualifier.ESTIMATED,
    DateValueTypes.BEFORE: DateQualifier.BEFORE,
    DateValueTypes.AFTER: DateQualifier.AFTER,
    DateValueTypes.CALCULATED: DateQualifier.CALCULATED,
}

# Auxiliary individual events and the type recorded for them
AUXILIARY_EVENTS = {
    "BAPM": "baptism",
    "CHR": "baptism",
    "BURI": "burial",
}

NAME_RE = re.compile(r"^([^/]*)\s*/([^/]+)/")
YEAR_RE = re.compile(r"^\d{4}$")


def parse_name(name_value: str | None) -> tuple[str | None, str | None]:
    """
    Split a GEDCOM name like "John Paul /Doe/" into (given names, surname).

    Without a slash-delimited surname the whole value is the given name.
    """
    if not name_value:
        return (None, None)

    match = NAME_RE.match(name_value)
    if match:
        given = match.group(1).strip() or None
        surname = match.group(2).strip() or None
        return (given, surname)

    return (name_value.strip() or None, None)


def normalize_sex(sex_value: str | None) -> Sex | None:
    """Map a SEX value onto Sex. Unrecognized non-empty values are unspecified."""
    if not sex_value or not sex_value.strip():
        return None

    s = sex_value.strip().upper()
    if s in ("M", "MALE"):
        return Sex.MALE
    if s in ("F", "FEMALE"):
        return Sex.FEMALE
    if s in ("X", "OTHER"):
        return Sex.OTHER
    return Sex.UNSPECIFIED


def month_to_number(month: str) -> int:
    """Three-letter month abbreviation to 1-12, 0 if not recognized."""
    return MONTH_MAP.get(month.upper(), 0)


def _to_int(token: str) -> int | None:
    try:
        return int(token)
    except ValueError:
        return None


def parse_date_qualifier(date_str: str) -> DateQualifier | None:
    """Qualifier of a GEDCOM date phrase ("ABT 1900" -> circa), if any."""
    try:
        kind = DateValue.parse(date_str).kind
    except ValueError:
        logger.debug("ged4py could not classify date %r", date_str)
        return None
    return QUALIFIER_MAP.get(kind)


def parse_date(date_str: str | None) -> DateInfo | None:
    """
    Parse a GEDCOM date string into a DateInfo.

    - "15 JUN 1980" -> day 15, month 6, year 1980
    - "1980"        -> year 1980
    - anything else keeps only the verbatim text

    The original text is always kept. A recognized qualifier (ABT, EST, BEF,
    AFT, CAL) is recorded but never adds day/month/year on its own.
    """
    if not date_str or not date_str.strip():
        return None

    info = DateInfo(text=date_str, qualifier=parse_date_qualifier(date_str))
    parts = date_str.split()

    if len(parts) == 3:
        info.day = _to_int(parts[0])
        info.month = month_to_number(parts[1])
        info.year = _to_int(parts[2])
    elif len(parts) == 1 and YEAR_RE.match(parts[0]):
        info.year = int(parts[0])

    return info


def extract_event(node: RecordNode) -> LifeEvent:
    """Extract date, place and notes from an event record (BIRT, DEAT, MARR, ...)."""
    event = LifeEvent(confirmed=True)
    for child in node.children:
        if child.tag == "DATE":
            event.date = parse_date(child.value)
        elif child.tag == "PLAC":
            event.place = child.value
        elif child.tag == "NOTE" and child.value:
            event.notes.append(child.value)
    return event


def extract_image(node: RecordNode) -> ProfileImage | None:
    """Inline OBJE record to a ProfileImage. Pointer-only objects are ignored."""
    file_value = node.sub_value("FILE")
    if not file_value:
        return None
    return ProfileImage(url=file_value, title=node.sub_value("TITL"))


def extract_individual(rec: RecordNode) -> Profile | None:
    """Build a Profile from an INDI record, or None if it has no xref id."""
    if rec.xref_id is None:
        return None

    profile = Profile(id=rec.xref_id)

    for child in rec.children:
        tag = child.tag
        if tag == "NAME":
            profile.first_name, profile.last_name = parse_name(child.value)
        elif tag == "SEX":
            profile.sex = normalize_sex(child.value)
        elif tag == "BIRT":
            profile.birth = extract_event(child)
        elif tag == "DEAT":
            profile.death = extract_event(child)
        elif tag in AUXILIARY_EVENTS:
            event = extract_event(child)
            event.type = AUXILIARY_EVENTS[tag]
            profile.events.append(event)
        elif tag == "FAMC":
            if child.pointer:
                profile.famc = child.pointer
        elif tag == "FAMS":
            if child.pointer:
                profile.fams.append(child.pointer)
        elif tag == "NOTE":
            if child.value:
                profile.notes.append(child.value)
        elif tag == "OBJE":
            image = extract_image(child)
            if image:
                profile.images.append(image)

    return profile


def extract_family(rec: RecordNode) -> Family | None:
    """Build a Family from a FAM record, or None if it has no xref id."""
    if rec.xref_id is None:
        return None

    family = Family(id=rec.xref_id)

    for child in rec.children:
        tag = child.tag
        if tag == "HUSB":
            family.husb = child.pointer
        elif tag == "WIFE":
            family.wife = child.pointer
        elif tag == "CHIL":
            if child.pointer:
                family.children.append(child.pointer)
        elif tag == "MARR":
            family.marriage = extract_event(child)
        elif tag == "DIV":
            family.divorce = extract_event(child)
        elif tag == "NOTE":
            if child.value:
                family.notes.append(child.value)

    return family


def extract_metadata(head: RecordNode | None) -> SourceMetadata:
    """Provenance from the HEAD record."""
    if head is None:
        return SourceMetadata(source="GEDCOM")

    sour = head.sub_tag("SOUR")
    gedc = head.sub_tag("GEDC")
    return SourceMetadata(
        source=(sour.value if sour and sour.value else "GEDCOM"),
        version=gedc.sub_value("VERS") if gedc else None,
        creator=sour.sub_value("NAME") if sour else None,
        created=head.sub_value("DATE"),
    )


def normalize_data(roots: list[RecordNode]) -> FamilyData:
    """
    Extract individuals and families from parsed top-level records.

    Records are kept in document order. Records without an xref id, and
    records repeating an id already seen, are dropped.
    """
    individuals: list[Profile] = []
    families: list[Family] = []
    seen_individuals: set[str] = set()
    seen_families: set[str] = set()
    head = None

    for rec in roots:
        if rec.tag == "HEAD" and head is None:
            head = rec
        elif rec.tag == "INDI":
            profile = extract_individual(rec)
            if profile is None:
                logger.debug("Dropping INDI record without an id")
            elif profile.id in seen_individuals:
                logger.warning("Dropping duplicate individual %s", profile.id)
            else:
                seen_individuals.add(profile.id)
                individuals.append(profile)
        elif rec.tag == "FAM":
            family = extract_family(rec)
            if family is None:
                logger.debug("Dropping FAM record without an id")
            elif family.id in seen_families:
                logger.warning("Dropping duplicate family %s", family.id)
            else:
                seen_families.add(family.id)
                families.append(family)

    logger.info("Extracted %d individuals and %d families", len(individuals), len(families))
    return FamilyData(individuals=individuals, families=families, metadata=extract_metadata(head))


def parse_gedcom(content: str | bytes) -> FamilyData:
    """
    Parse GEDCOM content into the normalized family model.

    Bytes are decoded as UTF-8. Malformed lines and id-less records are
    tolerated; only input that is not text raises.

    Raises:
        ParseError: if the content cannot be decoded or is not text.
    """
    if isinstance(content, (bytes, bytearray)):
        try:
            content = bytes(content).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Failed to decode GEDCOM content: {exc}") from exc

    try:
        roots = parse_records(content)
    except TypeError as exc:
        raise ParseError(f"Failed to parse GEDCOM content: {exc}") from exc

    return normalize_data(roots)


def parse_gedcom_file(filepath: Path | str, encoding: str = "utf-8-sig") -> FamilyData:
    """Read and parse a GEDCOM file."""
    path = Path(filepath)
    try:
        content = path.read_bytes().decode(encoding)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise ParseError(f"Failed to read GEDCOM file {path}: {exc}") from exc

    logger.info("Parsing GEDCOM file: %s", path)
    return parse_gedcom(content)
