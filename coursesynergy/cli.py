"""
CLI (Command Line Interface).

Quick terminal commands over two provider exports (normalized JSON), e.g.:

    coursesynergy scan aspy.json mas.json
    coursesynergy scan aspy.json mas.json --mode global --since 2026-03-01 --out groups.json
    coursesynergy summary aspy.json mas.json
    coursesynergy dictionary aspy.json mas.json --out dictionary.json
    coursesynergy tags "Uso de plataformas elevadoras"

Note:
- Inputs may be file paths or http(s) URLs
- This CLI prints plain text; --out writes JSON for further processing
"""

from __future__ import annotations

import argparse
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import requests

from coursesynergy.assembler import assemble, groups_only
from coursesynergy.dictionary import build_dictionary, dictionary_titles
from coursesynergy.keywords import KeywordExtractor
from coursesynergy.loader import course_to_dict, load_courses, upcoming_only
from coursesynergy.matcher import GREEDY, MODES
from coursesynergy.model import SOURCE_A, SOURCE_B, Course, Entry, SynergyGroup
from coursesynergy.summary import summarize


def _parse_since(text: Optional[str]) -> Optional[date]:
    """
    Parse the --since option (YYYY-MM-DD). Raises ValueError for bad input.
    """
    if not text:
        return None
    return datetime.strptime(text.strip(), "%Y-%m-%d").date()


def _load_both(args: argparse.Namespace) -> list[Course]:
    courses = load_courses(args.source_a, SOURCE_A) + load_courses(args.source_b, SOURCE_B)
    since = _parse_since(getattr(args, "since", None))
    if since is not None:
        courses = upcoming_only(courses, since)
    return courses


def _write_json(path: str, payload: Any) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def _entry_to_dict(entry: Entry) -> dict[str, Any]:
    if isinstance(entry, SynergyGroup):
        return {
            "type": "group",
            "id": entry.group_id,
            "scenario": entry.scenario_type,
            "host": entry.host.id if entry.host else None,
            "feeder": entry.feeder.id if entry.feeder else None,
            "students_to_move": entry.students_to_move,
            "courses": [course_to_dict(c) for c in entry.members],
        }
    return {"type": "course", **course_to_dict(entry)}


def _describe(group: SynergyGroup) -> str:
    first = group.members[0]
    start = first.start_date.isoformat() if first.start_date else "-"
    if group.host is not None and group.feeder is not None:
        flow = f"{group.feeder.id} -> {group.host.id}"
    else:
        flow = " / ".join(c.id for c in group.members)
    return f"- {start} {first.location} [{group.scenario_type}] move {group.students_to_move}: {flow}  ({first.title})"


def _cmd_scan(args: argparse.Namespace) -> int:
    """
    Run the synergy scan and print the resulting groups.
    """
    courses = _load_both(args)
    entries = assemble(courses, match_mode=args.mode)
    groups = groups_only(entries)

    if not groups:
        print("No synergies found.")
    else:
        print(f"Synergies found: {len(groups)}")
        for g in groups:
            print(_describe(g))

    print(f"Single courses: {len(entries) - len(groups)}")

    if args.out:
        _write_json(args.out, [_entry_to_dict(e) for e in entries])
        print(f"Written: {args.out}")
    return 0


def _cmd_summary(args: argparse.Namespace) -> int:
    courses = _load_both(args)
    entries = assemble(courses, match_mode=args.mode)

    for s in summarize(entries):
        print(
            f"{s.label}: {s.group_count} groups, {s.total_students} students "
            f"({SOURCE_A}: {s.students_a}, {SOURCE_B}: {s.students_b})"
        )
    return 0


def _cmd_dictionary(args: argparse.Namespace) -> int:
    """
    Build the 1:1 title audit dictionary of both providers.
    """
    titles_a = dictionary_titles(load_courses(args.source_a, SOURCE_A))
    titles_b = dictionary_titles(load_courses(args.source_b, SOURCE_B))
    entries = build_dictionary(titles_a, titles_b)

    pairs = [e for e in entries if e.is_pair]
    orphans_a = sum(1 for e in entries if e.title_a and not e.title_b)
    orphans_b = sum(1 for e in entries if e.title_b and not e.title_a)

    print(f"Unique titles: {SOURCE_A}={len(titles_a)} {SOURCE_B}={len(titles_b)}")
    for e in pairs:
        print(f"- [{e.score}] {e.title_a}  <->  {e.title_b}  ({e.keywords})")
    print(f"Pairs: {len(pairs)} | Orphans {SOURCE_A}: {orphans_a} | Orphans {SOURCE_B}: {orphans_b}")

    if args.out:
        _write_json(args.out, [e.to_dict() for e in entries])
        print(f"Written: {args.out}")
    return 0


def _cmd_tags(args: argparse.Namespace) -> int:
    title = (args.title or "").strip()
    if not title:
        print("Please provide a title.")
        return 1

    labels = KeywordExtractor().labels(title)
    print(", ".join(labels) if labels else "(no tags)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursesynergy", description="Course synergy detection CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_sources(p: argparse.ArgumentParser) -> None:
        p.add_argument("source_a", type=str, help=f"Provider {SOURCE_A} courses (JSON path or URL)")
        p.add_argument("source_b", type=str, help=f"Provider {SOURCE_B} courses (JSON path or URL)")

    p_scan = sub.add_parser("scan", help="Detect synergy groups")
    add_sources(p_scan)
    p_scan.add_argument("--mode", choices=MODES, default=GREEDY, help="Matching mode")
    p_scan.add_argument("--since", type=str, default=None, help="Only courses starting on/after YYYY-MM-DD")
    p_scan.add_argument("--out", type=str, default=None, help="Write the full ordered list as JSON")

    p_summary = sub.add_parser("summary", help="Summarize synergy groups by category")
    add_sources(p_summary)
    p_summary.add_argument("--mode", choices=MODES, default=GREEDY, help="Matching mode")
    p_summary.add_argument("--since", type=str, default=None, help="Only courses starting on/after YYYY-MM-DD")

    p_dict = sub.add_parser("dictionary", help="Build the 1:1 title audit dictionary")
    add_sources(p_dict)
    p_dict.add_argument("--out", type=str, default=None, help="Write the dictionary as JSON")

    p_tags = sub.add_parser("tags", help="Show topic tags of a course title")
    p_tags.add_argument("title", type=str, help="Course title")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    handlers = {
        "scan": _cmd_scan,
        "summary": _cmd_summary,
        "dictionary": _cmd_dictionary,
        "tags": _cmd_tags,
    }
    handler = handlers.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        raise SystemExit(handler(args))
    except ValueError as exc:
        print(f"Invalid input: {exc}")
        raise SystemExit(1)
    except requests.RequestException as exc:
        print(f"Could not load data: {exc}")
        raise SystemExit(1)
