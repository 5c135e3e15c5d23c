"""Fuzzy-match index powering correction suggestions.

Backed by rapidfuzz. The scorer is pluggable; the default is normalized
Jaro-Winkler similarity, which rewards shared prefixes and keeps short
typos such as ``teh`` -> ``ten`` above the default 0.7 threshold. Inputs
are normalized with ``rapidfuzz.utils.default_process`` (lowercased,
non-alphanumerics stripped) on both sides.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from rapidfuzz import process, utils
from rapidfuzz.distance import JaroWinkler

Scorer = Callable[..., float]

DEFAULT_MIN_SCORE = 0.7


class SimilarityIndex:
    """Nearest-neighbour string lookup over a fixed vocabulary.

    Immutable once built; a vocabulary change means building a new index.
    """

    def __init__(
        self,
        words: Iterable[str],
        scorer: Scorer = JaroWinkler.normalized_similarity,
    ) -> None:
        self._words = list(dict.fromkeys(words))
        self._scorer = scorer

    def __len__(self) -> int:
        return len(self._words)

    @property
    def words(self) -> list[str]:
        return list(self._words)

    def scored(self, word: str, min_score: float = DEFAULT_MIN_SCORE) -> list[tuple[str, float]]:
        """Return ``(candidate, score)`` pairs scoring at least ``min_score``, best first."""
        if not self._words or not utils.default_process(word):
            return []
        matches = process.extract(
            word,
            self._words,
            scorer=self._scorer,
            processor=utils.default_process,
            score_cutoff=min_score,
            limit=None,
        )
        return [(candidate, score) for candidate, score, _ in matches]

    def suggest(self, word: str, min_score: float = DEFAULT_MIN_SCORE) -> list[str]:
        """Return candidates scoring at least ``min_score``, ordered by descending score."""
        return [candidate for candidate, _ in self.scored(word, min_score)]
