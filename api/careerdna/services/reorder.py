from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ..models import ReportPlan
from .report import section_headings
from .selection import norm_title

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^#{1,6}\s")
_SECTION_RE = re.compile(r"^##\s+(.+?)\s*$")
_BULLET_RE = re.compile(r"^(\s*)(?:(\d+)([).])|[-*])\s+\*\*(.+?)\*\*")


@dataclass
class _Bullet:
    title: str
    lines: list[str] = field(default_factory=list)


def _strip_trailing_blanks(lines: list[str]) -> list[str]:
    tail: list[str] = []
    while lines and not lines[-1].strip():
        tail.insert(0, lines.pop())
    return tail


def _renumber(line: str, position: int) -> str:
    m = _BULLET_RE.match(line)
    if not m or m.group(2) is None:
        return line
    return f"{m.group(1)}{position}{m.group(3)}{line[m.end(3):]}"


def reorder_block(body: list[str], order: list[str]) -> list[str]:
    """Re-emit the bullets of one section in ``order``.

    Continuation lines stay with the bullet above them. Bullets whose titles
    are not in ``order`` keep their relative order after the known ones, and
    numbered bullets are renumbered from 1. A block with no bullets comes back
    unchanged.
    """
    preamble: list[str] = []
    bullets: list[_Bullet] = []
    for line in body:
        m = _BULLET_RE.match(line)
        if m:
            bullets.append(_Bullet(title=m.group(4), lines=[line]))
        elif bullets:
            bullets[-1].lines.append(line)
        else:
            preamble.append(line)
    if not bullets:
        return list(body)

    tail = _strip_trailing_blanks(bullets[-1].lines)
    loose = False
    for b in bullets[:-1]:
        if _strip_trailing_blanks(b.lines):
            loose = True

    rank = {}
    for idx, title in enumerate(order):
        rank.setdefault(norm_title(title), idx)
    known = [b for b in bullets if norm_title(b.title.rstrip(":")) in rank]
    known.sort(key=lambda b: rank[norm_title(b.title.rstrip(":"))])
    unknown = [b for b in bullets if norm_title(b.title.rstrip(":")) not in rank]

    out = list(preamble)
    for position, b in enumerate(known + unknown, start=1):
        if loose and position > 1:
            out.append("")
        out.append(_renumber(b.lines[0], position))
        out.extend(b.lines[1:])
    out.extend(tail)
    return out


def reorder_sections(markdown: str, plan: ReportPlan) -> str:
    by_heading = {heading.lower(): key for key, heading in section_headings(plan.status)}
    lines = markdown.split("\n")
    out: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        out.append(line)
        i += 1
        m = _SECTION_RE.match(line)
        if not m:
            continue
        body: list[str] = []
        while i < len(lines) and not _HEADING_RE.match(lines[i]):
            body.append(lines[i])
            i += 1
        key = by_heading.get(m.group(1).strip().lower())
        order = plan.sections.get(key, []) if key else []
        if order:
            out.extend(reorder_block(body, order))
        else:
            out.extend(body)
    return "\n".join(out)
