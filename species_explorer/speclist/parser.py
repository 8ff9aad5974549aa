"""UniProt ``speclist.txt`` parser.

Source: https://ftp.uniprot.org/pub/databases/uniprot/knowledgebase/complete/docs/speclist.txt

Expected structure of the real organism codes section::

    AADNV V 648330: N=Aedes albopictus densovirus (isolate Boublik/1994)
                    C=AalDNV
    ABAMA E 118393: N=Abalistes stellaris
                    C=Starry triggerfish
    ABANI E 72259: N=Abaeis nicippe
                   S=Eurema nicippe

Only organisms with an explicit ``C=`` (common name) line end up in the
result. Parsing is a single forward pass; ``step`` is the transition
function and can be driven one line at a time.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Container, Iterable

logger = logging.getLogger(__name__)

REAL_CODES_MARKER = "(1) Real organism codes"
VIRTUAL_CODES_MARKER = "(2) Virtual codes"

# CODE KIND TAXON: - kind is one of Viruses, Eukaryota, Bacteria, Archaea, Other
_HEADER_PATTERN = re.compile(r"^[A-Z0-9]{5}\s+[VEBAO]\s+\d+:")

# Scientific name, minus a trailing "(strain ...)" style annotation
_NAME_PATTERN = re.compile(r"N=([^()]+?)(?:\s*\([^)]*\))?$")


class Section(Enum):
    """Where in the document the parser is."""
    PREAMBLE = "preamble"
    DATA = "data"
    DONE = "done"


@dataclass(frozen=True)
class ParserState:
    section: Section = Section.PREAMBLE
    # Sticky across lines until the next header or an S= reset
    current_name: str = ""

    @property
    def finished(self) -> bool:
        return self.section is Section.DONE


def step(
    state: ParserState,
    line: str,
    recorded: Container[str] = (),
) -> tuple[ParserState, tuple[str, str] | None]:
    """Advance the parser by one line.

    Args:
        state: State before ``line``
        line: Raw line, without its line terminator
        recorded: Scientific names that already have a common name

    Returns:
        ``(new_state, record)`` where ``record`` is a
        ``(scientific_name, common_name)`` pair or None
    """
    if state.finished:
        return state, None

    if REAL_CODES_MARKER in line:
        return replace(state, section=Section.DATA), None

    if VIRTUAL_CODES_MARKER in line:
        return replace(state, section=Section.DONE), None

    if state.section is not Section.DATA:
        return state, None

    if line.startswith("_____") or line.startswith("==="):
        return state, None

    trimmed = line.strip()
    if not trimmed:
        return state, None

    current = state.current_name
    record = None

    if _HEADER_PATTERN.match(line) and "N=" in line:
        match = _NAME_PATTERN.search(line)
        if match:
            current = match.group(1).strip()

    if trimmed.startswith("C=") and current:
        common = trimmed[2:].strip()
        if common:
            record = (current, common)

    if trimmed.startswith("S=") and current:
        if current not in recorded:
            current = ""

    if current != state.current_name:
        state = replace(state, current_name=current)
    return state, record


def parse_lines(lines: Iterable[str]) -> dict[str, str]:
    """Run the state machine over ``lines`` and collect common names."""
    names: dict[str, str] = {}
    state = ParserState()
    for line in lines:
        state, record = step(state, line, names)
        if record is not None:
            scientific, common = record
            names[scientific] = common
        if state.finished:
            break
    return names


def parse_speclist(text: str) -> dict[str, str]:
    """Parse speclist text into ``{scientific_name: common_name}``.

    Pure: the same text always gives the same mapping.
    """
    names = parse_lines(text.split("\n"))
    logger.info(f"UniProt species list parsed: {len(names)} entries with common names")
    return names
