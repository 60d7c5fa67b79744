# tests/engine/scoring/test_scoring.py
"""
Tests unitaires pour engine.scoring.scoring

Couverture :
    - Encodage des réponses (yes=2, partially=1, no=0, dont-know=-1)
    - Réponse inconnue → ValueError
    - calculate_scores : tout "yes" → 20/20/100.0
    - calculate_scores : tout "no" → 0/20/0.0
    - calculate_scores : tout "dont-know" → -10/20/-50.0 (non borné)
    - Mélange : total = somme des points, max = 2 × N
    - Questions inconnues, doublons, réponses manquantes → ValueError
    - Textes des questions figés par ordre (question_texts)
    - Répartition par type de réponse, options affichées
    - Détail par question construit depuis les réponses stockées
"""
import pytest

from app.engine.scoring.scoring import (
    encode_response,
    decode_points,
    max_possible_score,
    score_bounds,
    percentage_score,
    calculate_scores,
    response_breakdown,
    answer_options,
    iter_answers,
    RESPONSE_POINTS,
)
from app.shared.enums import ResponseChoice
from tests.conftest import make_response, responses_all, make_question, make_questions

pytestmark = pytest.mark.engine


def _questions_map(n: int = 10) -> dict:
    return {q.id: q for q in make_questions(n)}


# ── encode_response / decode_points ───────────────────────────────────────────

class TestEncodeResponse:
    @pytest.mark.parametrize("answer,points", [
        (ResponseChoice.YES, 2),
        (ResponseChoice.PARTIALLY, 1),
        (ResponseChoice.NO, 0),
        (ResponseChoice.DONT_KNOW, -1),
    ])
    def test_echelle_fixe(self, answer, points):
        assert encode_response(answer) == points

    def test_accepte_la_valeur_texte(self):
        assert encode_response("partially") == 1

    def test_insensible_casse_et_espaces(self):
        assert encode_response("  YES ") == 2
        assert encode_response("Dont-Know") == -1

    def test_reponse_inconnue_leve_value_error(self):
        with pytest.raises(ValueError, match="Réponse inconnue"):
            encode_response("maybe")

    def test_points_toujours_dans_l_echelle(self):
        assert set(RESPONSE_POINTS.values()) == {-1, 0, 1, 2}


class TestDecodePoints:
    def test_inverse_de_encode(self):
        for choice in ResponseChoice:
            assert decode_points(encode_response(choice)) == choice

    def test_valeur_inconnue_leve_value_error(self):
        with pytest.raises(ValueError):
            decode_points(5)


# ── Bornes & pourcentage ──────────────────────────────────────────────────────

class TestBornes:
    def test_max_possible_double_du_nombre_de_questions(self):
        assert max_possible_score(10) == 20
        assert max_possible_score(7) == 14

    def test_score_bounds(self):
        assert score_bounds(10) == (-10, 20)

    def test_pourcentage_arrondi_2_decimales(self):
        assert percentage_score(1, 3) == 33.33

    def test_pourcentage_negatif_non_borne(self):
        assert percentage_score(-10, 20) == -50.0

    def test_max_nul_retourne_zero(self):
        assert percentage_score(5, 0) == 0.0


# ── calculate_scores ──────────────────────────────────────────────────────────

class TestCalculateScores:
    def test_tout_yes(self):
        result = calculate_scores(responses_all("yes"), _questions_map())
        assert result["total_score"] == 20
        assert result["max_possible_score"] == 20
        assert result["percentage_score"] == 100.0

    def test_tout_no(self):
        result = calculate_scores(responses_all("no"), _questions_map())
        assert result["total_score"] == 0
        assert result["max_possible_score"] == 20
        assert result["percentage_score"] == 0.0

    def test_tout_dont_know_score_negatif(self):
        result = calculate_scores(responses_all("dont-know"), _questions_map())
        assert result["total_score"] == -10
        assert result["percentage_score"] == -50.0

    def test_melange_somme_des_points(self):
        answers = ["yes"] * 5 + ["partially"] * 5
        responses = [make_response(i + 1, a) for i, a in enumerate(answers)]
        result = calculate_scores(responses, _questions_map())
        assert result["total_score"] == 15
        assert result["percentage_score"] == 75.0

    def test_max_suit_le_nombre_de_questions(self):
        result = calculate_scores(responses_all("yes", n=4), _questions_map(4))
        assert result["max_possible_score"] == 8

    def test_responses_indexees_par_ordre(self):
        questions = {
            7: make_question(id=7, assessment_id=1, order=2, text="B"),
            3: make_question(id=3, assessment_id=1, order=1, text="A"),
        }
        responses = [make_response(7, "no"), make_response(3, "yes")]
        result = calculate_scores(responses, questions)
        assert result["responses"] == {"1": 2, "2": 0}
        assert list(result["responses"]) == ["1", "2"]

    def test_textes_figes_par_ordre(self):
        questions = {
            7: make_question(id=7, assessment_id=1, order=2, text="B"),
            3: make_question(id=3, assessment_id=1, order=1, text="A"),
        }
        responses = [make_response(7, "no"), make_response(3, "yes")]
        result = calculate_scores(responses, questions)
        assert result["question_texts"] == {"1": "A", "2": "B"}

    def test_points_dans_l_echelle(self):
        answers = ["yes", "partially", "no", "dont-know"] * 2 + ["yes", "no"]
        responses = [make_response(i + 1, a) for i, a in enumerate(answers)]
        result = calculate_scores(responses, _questions_map())
        assert all(p in (-1, 0, 1, 2) for p in result["responses"].values())

    def test_question_inconnue_leve_value_error(self):
        responses = responses_all("yes", n=9) + [make_response(42, "yes")]
        with pytest.raises(ValueError, match="Question inconnue"):
            calculate_scores(responses, _questions_map())

    def test_reponse_en_double_leve_value_error(self):
        responses = responses_all("yes") + [make_response(1, "no")]
        with pytest.raises(ValueError, match="double"):
            calculate_scores(responses, _questions_map())

    def test_reponse_manquante_leve_value_error(self):
        with pytest.raises(ValueError, match="toutes les questions"):
            calculate_scores(responses_all("yes", n=9), _questions_map())

    def test_evaluation_sans_questions_leve_value_error(self):
        with pytest.raises(ValueError, match="sans questions"):
            calculate_scores(responses_all("yes", n=1), {})


# ── Répartition & affichage ───────────────────────────────────────────────────

class TestResponseBreakdown:
    def test_quatre_choix_toujours_presents(self):
        breakdown = response_breakdown({"1": 2, "2": 2})
        assert set(breakdown) == {"yes", "partially", "no", "dont-know"}
        assert breakdown["no"] == {"count": 0, "points": 0}

    def test_compte_et_points(self):
        breakdown = response_breakdown({"1": 2, "2": 2, "3": 1, "4": -1, "5": -1, "6": 0})
        assert breakdown["yes"] == {"count": 2, "points": 4}
        assert breakdown["partially"] == {"count": 1, "points": 1}
        assert breakdown["no"] == {"count": 1, "points": 0}
        assert breakdown["dont-know"] == {"count": 2, "points": -2}

    def test_valeur_stockee_invalide_leve_value_error(self):
        with pytest.raises(ValueError):
            response_breakdown({"1": 3})


class TestAffichage:
    def test_answer_options_quatre_options(self):
        options = answer_options()
        assert [o["value"] for o in options] == ["yes", "partially", "no", "dont-know"]
        assert [o["points"] for o in options] == [2, 1, 0, -1]
        assert options[1]["label"] == "Partially in Place"

    def test_iter_answers_relie_texte_et_reponse(self):
        texts = {"1": "Question 1", "2": "Question 2", "3": "Question 3"}
        rows = iter_answers(texts, {"1": 2, "2": -1, "3": 0})
        assert [r["answer"] for r in rows] == ["yes", "dont-know", "no"]
        assert rows[0]["text"] == "Question 1"

    def test_iter_answers_suit_les_reponses_stockees(self):
        # 10 réponses, textes connus pour 2 seulement
        responses = {str(i): 1 for i in range(10, 0, -1)}
        rows = iter_answers({"1": "A", "2": "B"}, responses)
        assert [r["order"] for r in rows] == list(range(1, 11))
        assert rows[2]["text"] is None
        assert rows[2]["answer"] == "partially"
