# routes/grading.py
from typing import List, Optional, Sequence, Tuple
from models.quiz import (
    GradedResult,
    Option,
    Question,
    QuestionResult,
    QuestionType,
    Quiz,
    SubmittedAnswer,
)

def find_answer(answers: Sequence[SubmittedAnswer], question_id: str) -> Optional[str]:
    """Return the userAnswer of the first submission for question_id, or None if unanswered."""
    for answer in answers:
        if answer.questionId == question_id:
            return answer.userAnswer
    return None

def find_correct_option(options: Sequence[Option]) -> Optional[Option]:
    # First match in authored order wins when more than one option is flagged
    for option in options:
        if option.isCorrect:
            return option
    return None

def _grade_choice(question: Question, user_answer: Optional[str]) -> Tuple[bool, str]:
    correct_option = find_correct_option(question.options)
    if correct_option is None:
        return False, ""
    return user_answer == correct_option.text, correct_option.text

def _grade_short_answer(question: Question, user_answer: Optional[str]) -> Tuple[bool, str]:
    if not question.correctAnswer:
        return False, ""
    # Case-insensitive only; whitespace is compared as-is
    is_correct = bool(user_answer) and user_answer.lower() == question.correctAnswer.lower()
    return is_correct, question.correctAnswer

def _grade_unknown(question: Question, user_answer: Optional[str]) -> Tuple[bool, str]:
    return False, ""

GRADERS = {
    QuestionType.MULTIPLE_CHOICE: _grade_choice,
    QuestionType.TRUE_FALSE: _grade_choice,
    QuestionType.SHORT_ANSWER: _grade_short_answer,
    QuestionType.UNKNOWN: _grade_unknown,
}

def grade_question(question: Question, answers: Sequence[SubmittedAnswer]) -> QuestionResult:
    user_answer = find_answer(answers, question.id)
    grader = GRADERS[QuestionType.classify(question.type)]
    is_correct, correct_answer_text = grader(question, user_answer)
    return QuestionResult(
        questionId=question.id,
        questionText=question.questionText,
        userAnswer=user_answer,
        correctAnswer=correct_answer_text,
        isCorrect=is_correct,
    )

def grade(quiz: Quiz, answers: Sequence[SubmittedAnswer]) -> GradedResult:
    """Grade a submission against a quiz.

    Never raises for well-formed models: missing answers, questions without a
    correct option and unrecognized question types all grade as incorrect.
    A quiz with no questions yields percentage 0 and passed False.
    """
    results: List[QuestionResult] = [grade_question(q, answers) for q in quiz.questions]
    score = sum(1 for r in results if r.isCorrect)
    total_questions = len(results)

    if total_questions == 0:
        percentage = 0.0
        passed = False
    else:
        percentage = (score / total_questions) * 100
        passed = percentage >= quiz.passPercentage

    return GradedResult(
        score=score,
        totalQuestions=total_questions,
        percentage=percentage,
        passed=passed,
        perQuestion=results,
    )
