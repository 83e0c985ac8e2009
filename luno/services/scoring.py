"""Quiz scoring: compare submitted letters with correct answers."""
from luno.schemas.quiz import QuestionResultSchema


def percentage(score: int, total: int) -> int:
    """Percentage rounded half up; 0 when there is nothing to score."""
    if total <= 0:
        return 0
    return int(score * 100 / total + 0.5)


def score_answers(questions: list, answers: dict) -> tuple[int, list[QuestionResultSchema]]:
    """Return (score, per-question results) for a quiz submission.

    `answers` maps question id (int or str, as JSON keys arrive) to a letter.
    """
    by_id = {str(k): v for k, v in answers.items()}
    score = 0
    results = []
    for q in questions:
        user_answer = by_id.get(str(q.id))
        is_correct = user_answer is not None and user_answer == q.correct_answer
        if is_correct:
            score += 1
        results.append(QuestionResultSchema(
            questionId=q.id,
            userAnswer=user_answer,
            correctAnswer=q.correct_answer,
            isCorrect=is_correct,
            question=q.question_text,
            explanation=q.explanation,
        ))
    return score, results


def is_passing(score: int, total: int, pass_percentage: int) -> bool:
    if total <= 0:
        return False
    return score / total * 100 >= pass_percentage
