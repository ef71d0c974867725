"""Line-level GEDCOM reading: raw text into a tree of tagged record nodes."""

from dataclasses import dataclass, field
import logging
import re

logger = logging.getLogger("gedgraph.records")


# <level> [<@xref@>] <TAG> [<payload>]
LINE_RE = re.compile(
    r"^\s*(?P<level>-?\d+)\s+(?:(?P<xref>@[^@\s]+@)\s+)?(?P<tag>[A-Za-z0-9_]+)(?:[ \t](?P<payload>.*))?$"
)
POINTER_RE = re.compile(r"^@[^@\s]+@$")

CONTINUATION_TAGS = {"CONC", "CONT"}


@dataclass
class RecordNode:
    level: int
    tag: str
    xref_id: str | None = None  # id declared by this line, e.g. "@I1@"
    pointer: str | None = None  # payload that references another record
    value: str | None = None  # scalar payload
    children: list["RecordNode"] = field(default_factory=list)

    def sub_tag(self, tag: str) -> "RecordNode | None":
        """First direct child with the given tag, or None."""
        for child in self.children:
            if child.tag == tag:
                return child
        return None

    def sub_value(self, tag: str) -> str | None:
        child = self.sub_tag(tag)
        return child.value if child else None


def tokenize_line(line: str) -> RecordNode | None:
    """Split one line into a childless node. Returns None if the line is not well formed."""
    match = LINE_RE.match(line)
    if match is None:
        return None

    # Anything at or below zero is a top-level record
    level = max(int(match.group("level")), 0)
    payload = match.group("payload")
    pointer = None
    value = None
    if payload is not None:
        stripped = payload.strip()
        if POINTER_RE.match(stripped):
            pointer = stripped
        elif stripped:
            value = payload

    return RecordNode(
        level=level,
        tag=match.group("tag").upper(),
        xref_id=match.group("xref"),
        pointer=pointer,
        value=value,
    )


def _fold_continuation(target: RecordNode, line_node: RecordNode):
    text = line_node.value or ""
    if line_node.tag == "CONT":
        target.value = f"{target.value or ''}\n{text}"
    else:
        target.value = f"{target.value or ''}{text}"


def parse_records(text: str) -> list[RecordNode]:
    """
    Parse GEDCOM text into its top-level records.

    Each line's level decides where it hangs: a level N line becomes a child of
    the most recent open node with a lower level. Open nodes are kept on an
    explicit stack, so arbitrarily deep nesting cannot exhaust the call stack.

    Blank and malformed lines are skipped. CONC/CONT lines are merged into the
    value of the node they continue.

    Raises:
        TypeError: if `text` is not a string.
    """
    if not isinstance(text, str):
        raise TypeError(f"GEDCOM input must be text, not {type(text).__name__}")

    roots: list[RecordNode] = []
    stack: list[RecordNode] = []
    skipped = 0

    for lineno, line in enumerate(text.lstrip("\ufeff").splitlines(), start=1):
        if not line.strip():
            continue

        node = tokenize_line(line)
        if node is None:
            skipped += 1
            logger.debug("Skipping malformed line %d: %r", lineno, line[:80])
            continue

        # Close every open node at the same or a deeper level
        while stack and stack[-1].level >= node.level:
            stack.pop()

        if node.tag in CONTINUATION_TAGS:
            if stack:
                _fold_continuation(stack[-1], node)
            else:
                skipped += 1
                logger.debug("Skipping continuation line %d with nothing to continue", lineno)
            continue

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    if skipped:
        logger.info("Skipped %d malformed line(s)", skipped)
    return roots
