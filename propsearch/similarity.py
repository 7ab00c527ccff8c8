"""String similarity measures used by fuzzy search and ad-hoc scoring."""

from rapidfuzz.distance import Levenshtein

from .models import FuzzyMatch, MatchType

PREFIX_SCORE = 0.9
SUBSEQUENCE_FACTOR = 0.7


def levenshtein_distance(s1: str, s2: str) -> int:
    """Compute the Levenshtein edit distance between two strings.

    Insertions, deletions and substitutions all cost 1.
    """
    return Levenshtein.distance(s1, s2)


def calculate_similarity(s1: str, s2: str) -> float:
    """Compute normalized Levenshtein similarity in [0, 1].

    The distance is normalized by the longer string. Two empty strings are
    identical and score 1.0.
    """
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0

    return (max_len - Levenshtein.distance(s1, s2)) / max_len


def is_subsequence(query: str, text: str) -> bool:
    """Check whether all characters of query appear in text in order."""
    chars = iter(text)
    return all(char in chars for char in query)


def fuzzy_match(query: str | None, text: str | None, threshold: float = 0.5) -> FuzzyMatch:
    """Match a query against text, reporting how strongly it matched.

    Checks are tried strongest first: equality, prefix, substring,
    Levenshtein similarity and finally subsequence. Comparison is
    case-insensitive.

    Args:
        query: Query text (usually a single token)
        text: Text to match against
        threshold: Minimum similarity accepted as a fuzzy match

    Returns:
        FuzzyMatch with match flag, score and match type
    """
    if not query or not text:
        return FuzzyMatch.none()

    query_lower = query.lower()
    text_lower = text.lower()

    if text_lower == query_lower:
        return FuzzyMatch(match=True, score=1.0, type=MatchType.EXACT)

    if text_lower.startswith(query_lower):
        return FuzzyMatch(match=True, score=PREFIX_SCORE, type=MatchType.PREFIX)

    if query_lower in text_lower:
        return FuzzyMatch(match=True, score=1.0, type=MatchType.EXACT)

    similarity = calculate_similarity(query_lower, text_lower)
    if similarity >= threshold:
        return FuzzyMatch(match=True, score=similarity, type=MatchType.FUZZY)

    if is_subsequence(query_lower, text_lower):
        score = len(query_lower) / len(text_lower) * SUBSEQUENCE_FACTOR
        return FuzzyMatch(match=True, score=score, type=MatchType.SUBSEQUENCE)

    return FuzzyMatch.none()
