"""
Title similarity.

Two judgements over the tags of two titles:
- are_similar: permissive, any shared tag counts (used by the date-ordered scan)
- match_score: strict, sums the weights of shared tags but only if at least one
  shared tag is specific (weight >= SPECIFIC_WEIGHT); generic-only overlaps
  such as a bare "PRL" or "Seguridad" score 0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from coursesynergy.keywords import KeywordExtractor
from coursesynergy.model import Tag


SPECIFIC_WEIGHT = 2


@dataclass(frozen=True)
class MatchScore:
    score: int = 0
    shared_tags: frozenset[Tag] = field(default_factory=frozenset)

    @property
    def labels(self) -> list[str]:
        return sorted(t.label for t in self.shared_tags)


class TitleSimilarityJudge:
    def __init__(self, extractor: Optional[KeywordExtractor] = None, specific_weight: int = SPECIFIC_WEIGHT) -> None:
        self.extractor = extractor if extractor is not None else KeywordExtractor()
        self.specific_weight = specific_weight

    def _shared(self, title_a: Optional[str], title_b: Optional[str]) -> frozenset[Tag]:
        # compare by label; the weight is taken from the first title's tag
        tags_b = {t.label for t in self.extractor.extract(title_b)}
        return frozenset(t for t in self.extractor.extract(title_a) if t.label in tags_b)

    def are_similar(self, title_a: Optional[str], title_b: Optional[str]) -> bool:
        return bool(self._shared(title_a, title_b))

    def match_score(self, title_a: Optional[str], title_b: Optional[str]) -> MatchScore:
        shared = self._shared(title_a, title_b)
        if not any(t.weight >= self.specific_weight for t in shared):
            return MatchScore()
        return MatchScore(score=sum(t.weight for t in shared), shared_tags=shared)
