# engine/scoring/scoring.py
"""
Calcul du score d'une tentative, sans accès DB.
Reçoit les données en paramètre, retourne un résultat structuré.

Échelle fixe à quatre points, identique pour toutes les questions :
    yes = +2 | partially = +1 | no = 0 | dont-know = -1

Appelé par : modules/assessment/service.py
"""
from typing import Any, Dict, List, Mapping, Tuple, Union

from app.shared.enums import ResponseChoice

# --- ÉCHELLE ---
RESPONSE_POINTS: Dict[ResponseChoice, int] = {
    ResponseChoice.YES:       2,
    ResponseChoice.PARTIALLY: 1,
    ResponseChoice.NO:        0,
    ResponseChoice.DONT_KNOW: -1,
}
POINTS_TO_CHOICE = {points: choice for choice, points in RESPONSE_POINTS.items()}

RESPONSE_LABELS: Dict[ResponseChoice, str] = {
    ResponseChoice.YES:       "Yes",
    ResponseChoice.PARTIALLY: "Partially in Place",
    ResponseChoice.NO:        "No",
    ResponseChoice.DONT_KNOW: "Don't Know",
}

MAX_POINTS_PER_QUESTION = max(RESPONSE_POINTS.values())
MIN_POINTS_PER_QUESTION = min(RESPONSE_POINTS.values())


def encode_response(answer: Union[ResponseChoice, str]) -> int:
    """Réponse catégorielle → points. Insensible à la casse et aux espaces."""
    try:
        choice = ResponseChoice(str(getattr(answer, "value", answer)).strip().lower())
    except ValueError:
        raise ValueError(f"Réponse inconnue : {answer!r}")
    return RESPONSE_POINTS[choice]


def decode_points(points: int) -> ResponseChoice:
    """Points stockés → réponse d'origine (pour le détail d'une tentative)."""
    try:
        return POINTS_TO_CHOICE[int(points)]
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"Valeur de score inconnue : {points!r}")


def max_possible_score(question_count: int) -> int:
    return question_count * MAX_POINTS_PER_QUESTION


def score_bounds(question_count: int) -> Tuple[int, int]:
    """(score le plus bas atteignable, score le plus haut atteignable)."""
    return (
        question_count * MIN_POINTS_PER_QUESTION,
        question_count * MAX_POINTS_PER_QUESTION,
    )


def percentage_score(total: int, maximum: int) -> float:
    """
    Pourcentage arrondi à 2 décimales, NON borné :
    10 × "dont-know" → -10 / 20 → -50.0
    """
    if maximum <= 0:
        return 0.0
    return round(total / maximum * 100, 2)


def calculate_scores(
    responses: List[Any],             # objets avec .question_id et .answer
    questions_map: Dict[int, Any],    # {question_id: AssessmentQuestion}
) -> Dict:
    """
    Calcule le score d'une tentative à partir des réponses brutes.

    La DB est interrogée en amont (dans le service), les données
    arrivent ici déjà hydratées. Toutes les questions doivent avoir
    exactement une réponse.
    """
    if not questions_map:
        raise ValueError("Évaluation sans questions.")

    points_by_order: Dict[str, int] = {}
    text_by_order: Dict[str, str] = {}
    answered = set()

    for response in responses:
        question = questions_map.get(response.question_id)
        if question is None:
            raise ValueError(f"Question inconnue : {response.question_id}")
        if response.question_id in answered:
            raise ValueError(f"Réponse en double pour la question {response.question_id}")

        answered.add(response.question_id)
        points_by_order[str(question.order)] = encode_response(response.answer)
        text_by_order[str(question.order)] = question.text

    missing = set(questions_map) - answered
    if missing:
        raise ValueError(
            f"Merci de répondre à toutes les questions ({len(missing)} sans réponse)."
        )

    total = sum(points_by_order.values())
    maximum = max_possible_score(len(questions_map))

    return {
        "total_score":        total,
        "max_possible_score": maximum,
        "percentage_score":   percentage_score(total, maximum),
        "responses":          dict(sorted(points_by_order.items(), key=lambda kv: int(kv[0]))),
        "question_texts":     dict(sorted(text_by_order.items(), key=lambda kv: int(kv[0]))),
    }


def response_breakdown(responses: Mapping[str, int]) -> Dict[str, Dict[str, int]]:
    """
    Répartition par type de réponse d'une tentative stockée.
    Les quatre choix sont toujours présents, même à 0.
    """
    breakdown = {
        choice.value: {"count": 0, "points": 0} for choice in RESPONSE_POINTS
    }
    for points in responses.values():
        choice = decode_points(points)
        breakdown[choice.value]["count"] += 1
        breakdown[choice.value]["points"] += RESPONSE_POINTS[choice]
    return breakdown


def answer_options() -> List[Dict]:
    """Les quatre options affichées sous chaque question."""
    return [
        {"value": choice.value, "label": RESPONSE_LABELS[choice], "points": points}
        for choice, points in RESPONSE_POINTS.items()
    ]


def iter_answers(question_texts: Mapping[str, str], responses: Mapping[str, int]) -> List[Dict]:
    """
    Détail question par question d'une tentative figée.

    Parcourt les réponses stockées (et non les questions actuelles) :
    un remplacement ultérieur des questions ne change ni le texte
    affiché ni le nombre de lignes.
    """
    rows = []
    for order, points in sorted(responses.items(), key=lambda kv: int(kv[0])):
        rows.append({
            "order":  int(order),
            "text":   question_texts.get(str(order)),
            "answer": decode_points(points).value,
            "points": points,
        })
    return rows
