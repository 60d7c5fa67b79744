# engine/scoring/interpretation.py
"""
Sélection de l'interprétation textuelle d'un score, sans accès DB.

Les plages sont saisies par l'admin : elles peuvent se chevaucher
ou laisser des trous. interpret() prend la première plage qui contient
le score, dans l'ordre fourni ; audit_ranges() signale les anomalies
sans jamais bloquer la saisie.
"""
from typing import Any, Dict, List, Optional, Sequence

# Plages par défaut du questionnaire ICP (10 questions, score ∈ [-10, 20])
DEFAULT_SCORE_RANGES: List[Dict] = [
    {
        "min_score": 17, "max_score": 20,
        "status": "Ready to Grow",
        "interpretation": "You have a clear, shared Ideal Customer Profile (ICP) that guides decisions.",
    },
    {
        "min_score": 12, "max_score": 16,
        "status": "Needs Fine-Tuning",
        "interpretation": (
            "The Ideal Customer Profile exists but needs better clarity, "
            "alignment, or usage across functions."
        ),
    },
    {
        "min_score": 5, "max_score": 11,
        "status": "Needs Structuring",
        "interpretation": (
            "Some elements of Ideal Customer Profile are known, but structure "
            "and consistent application are lacking."
        ),
    },
    {
        "min_score": -10, "max_score": 4,
        "status": "Needs Clarity",
        "interpretation": "Target customer definition is unclear or missing, it's the first step to fix.",
    },
]


def _bound(score_range: Any, name: str) -> int:
    if isinstance(score_range, dict):
        return score_range[name]
    return getattr(score_range, name)


def interpret(score: int, ranges: Sequence[Any]) -> Optional[Any]:
    """Première plage telle que min_score <= score <= max_score, sinon None."""
    for score_range in ranges:
        if _bound(score_range, "min_score") <= score <= _bound(score_range, "max_score"):
            return score_range
    return None


def audit_ranges(ranges: Sequence[Any], lowest: int, highest: int) -> Dict:
    """
    Contrôle de cohérence des plages sur [lowest, highest] (scores entiers).

    Retourne :
        gaps     : [[a, b], ...]  intervalles de scores sans interprétation
        overlaps : [[i, j], ...]  index (dans `ranges`) des plages qui se chevauchent
        invalid  : [i, ...]       plages avec min_score > max_score
    """
    invalid = [
        i for i, r in enumerate(ranges)
        if _bound(r, "min_score") > _bound(r, "max_score")
    ]
    valid = [(i, r) for i, r in enumerate(ranges) if i not in invalid]

    overlaps = []
    for pos, (i, a) in enumerate(valid):
        for j, b in valid[pos + 1:]:
            if (_bound(a, "min_score") <= _bound(b, "max_score")
                    and _bound(b, "min_score") <= _bound(a, "max_score")):
                overlaps.append([i, j])

    gaps = []
    cursor = lowest
    for _, r in sorted(valid, key=lambda item: _bound(item[1], "min_score")):
        lo, hi = _bound(r, "min_score"), _bound(r, "max_score")
        if hi < cursor:
            continue
        if lo > cursor:
            gaps.append([cursor, min(lo - 1, highest)])
        cursor = max(cursor, hi + 1)
        if cursor > highest:
            break
    if cursor <= highest:
        gaps.append([cursor, highest])

    gaps = [g for g in gaps if g[0] <= g[1]]

    return {
        "gaps":        gaps,
        "overlaps":    overlaps,
        "invalid":     invalid,
        "is_coherent": not gaps and not overlaps and not invalid,
    }
