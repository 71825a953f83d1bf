import argparse
import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from careerdna.config import DATA_DIR
from careerdna.library import BANK_FILES, read_bank_json
from careerdna.services.bank_validation import ROLE_KINDS, unlinked_role_fit_areas, validate_bank
from careerdna.traits import ARCHETYPES


def _flatten(name: str, raw) -> list[dict]:
    if not isinstance(raw, list):
        return []
    if name != "roles":
        return [r for r in raw if isinstance(r, dict)]
    out: list[dict] = []
    for group in raw:
        if not isinstance(group, dict):
            continue
        for kind in ROLE_KINDS:
            entries = group.get(kind)
            if isinstance(entries, list):
                out.extend(e for e in entries if isinstance(e, dict))
    return out


def archetype_coverage(items: list[dict]) -> dict[str, int]:
    counts = {a: 0 for a in ARCHETYPES}
    for it in items:
        tags = it.get("archetypes") if isinstance(it.get("archetypes"), list) else []
        for tag in set(tags):
            if tag in counts:
                counts[tag] += 1
    return counts


def diagnose(data_dir: Path) -> dict:
    raw_banks = {name: read_bank_json(data_dir, name) for name in BANK_FILES}
    report: dict = {"data_dir": str(data_dir), "banks": {}}
    for name, raw in raw_banks.items():
        items = _flatten(name, raw)
        report["banks"][name] = {
            "count": len(items),
            "errors": validate_bank(name, raw),
            "coverage": archetype_coverage(items),
        }

    fit_area_titles = {str(r.get("title")) for r in _flatten("fit_areas", raw_banks["fit_areas"]) if r.get("title")}
    linked = {str(g.get("fit_area")).strip().lower() for g in raw_banks["roles"] if isinstance(g, dict)} if isinstance(raw_banks["roles"], list) else set()
    report["roles_unlinked_fit_areas"] = unlinked_role_fit_areas(raw_banks["roles"], fit_area_titles)
    report["fit_areas_without_roles"] = sorted(t for t in fit_area_titles if t.strip().lower() not in linked)
    report["ok"] = not any(b["errors"] for b in report["banks"].values()) and not report["roles_unlinked_fit_areas"]
    return report


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate CareerDNA content banks")
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR)
    parser.add_argument("--strict", action="store_true", help="exit non-zero when problems are found")
    args = parser.parse_args()

    report = diagnose(args.data_dir)
    print(json.dumps(report, indent=2))
    if args.strict and not report["ok"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
