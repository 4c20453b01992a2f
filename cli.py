import argparse
import random

from dotest.config import LOG_LEVEL
from dotest.database import SessionLocal, init_db
from dotest.errors import NotFoundError
from dotest.logging_setup import setup_console_logging
from dotest.models.domain import AnswerFeedback, AnswerOutcome, SessionQuestion
from dotest.services import session_service
from dotest.services.content_service import SqlContentRepository
from dotest.services.session_service import SessionStore

setup_console_logging(LOG_LEVEL)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Take a chapter test in the terminal")
    parser.add_argument("book_id", help="Textbook id, e.g. E01")
    parser.add_argument("chapter_id", help="Chapter id, e.g. E01-C00")
    parser.add_argument(
        "--set",
        dest="set_id",
        default=None,
        help="Question set (random when omitted)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible sampling and shuffling",
    )
    return parser.parse_args()


def ask(labels: tuple[str, ...]) -> str:
    while True:
        answer = input(f"Answer ({'/'.join(labels)}): ").strip().upper()
        if answer in labels:
            return answer
        print("Please enter one of the listed letters.")


def submit_answer(
    store: SessionStore, session_id: str, question: SessionQuestion, label: str
) -> AnswerFeedback:
    """Answer with the option text displayed under `label`."""
    return session_service.answer_question(
        store, session_id, question.question_id, question.option_for_label(label)
    )


def main() -> None:
    args = parse_args()
    init_db()
    store = SessionStore()
    rng = random.Random(args.seed)

    db = SessionLocal()
    try:
        session = session_service.start_session(
            store,
            SqlContentRepository(db),
            rng,
            args.book_id,
            args.chapter_id,
            set_id=args.set_id,
        )
    except NotFoundError as exc:
        print(exc)
        return
    finally:
        db.close()

    question = session.current_question
    while question is not None:
        print(f"\n[{session.current_index + 1}/{session.total}] "
              f"{question.question.question_text}")
        for label, text in zip(question.labels, question.shuffled_options):
            print(f"  {label}. {text}")

        feedback = submit_answer(
            store, session.session_id, question, ask(question.labels)
        )
        print("Correct!" if feedback.is_correct else f"Wrong. Answer: {feedback.correct_text}")
        if feedback.explanation:
            print(feedback.explanation)

        question = session_service.advance(store, session.session_id).question

    report = session_service.get_report(store, session.session_id)
    print(f"\nScore: {report.correct_count}/{report.total} ({report.percentage}%)")
    missed = [r for r in report.results if r.outcome is not AnswerOutcome.CORRECT]
    for result in missed:
        pages = ", ".join(result.page_references)
        print(f"  {result.question_id}: {result.correct_text}" + (f" ({pages})" if pages else ""))


if __name__ == "__main__":
    main()
