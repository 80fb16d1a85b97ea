"""
Title audit dictionary.

Pairs the unique course titles of both providers 1:1 with the strict
similarity score and global best-first assignment, then lists the titles
left without a counterpart ("orphans") together with their own tags.

Output order: pairs by score (highest first), then orphans alphabetically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from coursesynergy.matcher import assign_globally
from coursesynergy.model import Course
from coursesynergy.similarity import TitleSimilarityJudge


@dataclass(frozen=True)
class DictionaryEntry:
    title_a: str
    title_b: str
    score: int
    keywords: str

    @property
    def is_pair(self) -> bool:
        return bool(self.title_a and self.title_b)

    def to_dict(self) -> dict:
        return {"title_a": self.title_a, "title_b": self.title_b, "score": self.score, "keywords": self.keywords}


def _unique_titles(titles: Iterable[str]) -> list[str]:
    return sorted({t.strip() for t in titles if isinstance(t, str) and t.strip()})


def dictionary_titles(courses: Iterable[Course]) -> list[str]:
    return _unique_titles(c.title for c in courses)


def build_dictionary(
    titles_a: Iterable[str],
    titles_b: Iterable[str],
    judge: Optional[TitleSimilarityJudge] = None,
) -> list[DictionaryEntry]:
    if judge is None:
        judge = TitleSimilarityJudge()

    uniq_a = _unique_titles(titles_a)
    uniq_b = _unique_titles(titles_b)

    candidates: list[DictionaryEntry] = []
    for a in uniq_a:
        for b in uniq_b:
            result = judge.match_score(a, b)
            if result.score > 0:
                candidates.append(DictionaryEntry(a, b, result.score, ", ".join(result.labels)))

    pairs = assign_globally(
        candidates,
        left_key=lambda e: e.title_a,
        right_key=lambda e: e.title_b,
        sort_key=lambda e: (-e.score, e.title_a, e.title_b),
    )

    used_a = {e.title_a for e in pairs}
    used_b = {e.title_b for e in pairs}

    def own_keywords(title: str) -> str:
        return ", ".join(judge.extractor.labels(title)) or "-"

    orphans = [DictionaryEntry(a, "", 0, own_keywords(a)) for a in uniq_a if a not in used_a]
    orphans.extend(DictionaryEntry("", b, 0, own_keywords(b)) for b in uniq_b if b not in used_b)
    orphans.sort(key=lambda e: e.title_a or e.title_b)

    # assign_globally already yields pairs in score order
    return [*pairs, *orphans]
