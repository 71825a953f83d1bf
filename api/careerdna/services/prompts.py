from __future__ import annotations

import json
from typing import Any

from ..models import ReportPlan, SummaryRequest
from .definitions import ARCHETYPE_VERBS, blend_phrase, definitions_payload
from .report import section_headings

SUMMARY_SENTENCES = 7
BULLET_RANGE = "2-3"

_GENERAL_RULES = """You are writing a personal, item-by-item report. Each bullet must stand on its own. Do NOT refer to other bullets.

GENERAL LANGUAGE RULES
- Write in clear, natural English.
- Use 2-3 short sentences per bullet.
- No dashes to glue ideas; write full sentences.
- Do not invent activities or achievements; describe tendencies.
- ALWAYS ground the explanation in the archetypes passed for that item.
- NEVER use the word "energy". Use "blend", "traits", "profile", or "style".

VARIETY RULES
- Do NOT start two bullets in a row with the same word.
- Rotate between opener patterns:
  * "Your [Archetype] + [Archetype] blend means ..."
  * "One side of your profile is [Archetype], which ..."
  * "This fits you because your profile mixes [Archetype] and [Archetype] ..."
  * "With a strong [Archetype] strand, you tend to ..."
  * "People with this mix often ..."

SUBDIMENSIONS
- Some items in META include 0 or 1 subdimension hints (already filtered to what the user scored high on).
- If there IS a hint for that item, add EXACTLY ONE final sentence:
  "This also suits your [subdimension in simple words] because it lets you use that preference."
- If there is NO hint, do NOT invent one. The hint sentence always comes LAST.

LOGIC FOR EVERY ITEM
1. WHY: name 1-2 of the item's archetypes and what they typically do.
2. FIT: link that to the specific item.
3. BENEFIT: show why this helps the user or why they will probably enjoy it.
4. SUBDIM: only if a hint is present, add the final sentence above."""


def skeleton_list(titles: list[str]) -> str:
    return "\n".join(f"{i}) **{title}**: " for i, title in enumerate(titles, start=1))


def blend_line(archetypes: list[str]) -> str:
    return f"**Your profile blends {blend_phrase(archetypes)} archetypes.**"


def _summary_rules(names: list[str]) -> str:
    verbs = "\n".join(f"  * {n} -> {ARCHETYPE_VERBS[n]}" for n in names if n in ARCHETYPE_VERBS)
    return (
        "SUMMARY RULES\n"
        '- Start with "Your profile blends" followed by allowed.archetypes in META, in the SAME order.\n'
        "- Do NOT add archetypes that are not in allowed.archetypes.\n"
        "- Unpack those archetypes using the definitions in META:\n"
        f"{verbs}\n"
        "- Then say what kinds of projects this mix suits.\n"
        "- End by signalling that the next sections show strengths, environments and options."
    )


def _section_counts(plan: ReportPlan, headings: tuple[tuple[str, str], ...]) -> str:
    lines = ["SECTION COUNTS", f"- Summary: 1 paragraph, {SUMMARY_SENTENCES} sentences."]
    for key, heading in headings:
        n = len(plan.sections.get(key, []))
        line = f"- {heading}: {n} bullets, {BULLET_RANGE} sentences each."
        if key == "subjects" and plan.subjects:
            line += " Start with the subjects the user already studies or likes, then archetype-matched subjects."
        lines.append(line)
    return "\n".join(lines)


def build_meta(plan: ReportPlan, request: SummaryRequest) -> dict[str, Any]:
    items: dict[str, list[dict[str, Any]]] = {}
    for section, titles in plan.sections.items():
        items[section] = [
            {
                "title": t,
                "archetypes": plan.item_archetypes.get(section, {}).get(t, []),
                "subdims": plan.item_subdim_hints.get(section, {}).get(t, []),
            }
            for t in titles
        ]
    return {
        "user": {
            "status": request.status,
            "age": request.age,
            "archetypes": request.archetype_map(),
            "subjects": list(request.subjects),
        },
        "definitions": definitions_payload(),
        "allowed": {"archetypes": plan.included_names, "subdims": list(plan.allowed_subdims)},
        "items": items,
    }


def build_report_prompt(plan: ReportPlan, request: SummaryRequest) -> str:
    headings = section_headings(plan.status)
    meta = json.dumps(build_meta(plan, request), indent=2, ensure_ascii=False)
    parts = [
        "[META START]",
        meta,
        "[META END]",
        "",
        _GENERAL_RULES,
        "",
        _summary_rules(plan.included_names),
        "",
        _section_counts(plan, headings),
        "",
        "# Your Personalized CareerDNA Summary",
        "",
        "## Summary",
        blend_line(plan.included_names),
        f"(Continue the summary with the remaining {SUMMARY_SENTENCES - 1} sentences. "
        "Do NOT rewrite or reorder the first line.)",
    ]
    for key, heading in headings:
        titles = plan.sections.get(key, [])
        if not titles:
            continue
        parts.extend(["", f"## {heading}", skeleton_list(titles)])
    return "\n".join(parts) + "\n"
