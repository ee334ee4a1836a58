"""
SUS Survey - System Usability Scale

CLI entry point for collecting submissions and viewing statistics.
"""

import argparse
import json
import logging
import sys

from sus_survey.errors import StorageUnavailable, ValidationError
from sus_survey.models.question import SUS_QUESTIONS
from sus_survey.service import SurveyService
from sus_survey.utils.export import statistics_table
from sus_survey.utils.storage import CsvResponseRepository
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SUS Survey - System Usability Scale scoring and statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a nickname before answering
  python main.py start --nickname alice

  # Submit ten answers (Q1..Q10, each 1-5)
  python main.py submit --nickname alice 4 2 5 1 4 2 5 1 4 2

  # Show all stored submissions
  python main.py results

  # Show dashboard statistics as JSON
  python main.py stats --json

  # Export all submissions to CSV
  python main.py export --output-dir output
        """
    )

    parser.add_argument(
        "--results-file",
        default=str(settings.RESULTS_FILE),
        help=f"Results CSV (default: {settings.RESULTS_FILE})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    start = subparsers.add_parser("start", help="Validate a nickname and list the questions")
    start.add_argument("--nickname", default="", help="Respondent nickname")

    submit = subparsers.add_parser("submit", help="Score and store one submission")
    submit.add_argument("--nickname", default="", help="Respondent nickname")
    submit.add_argument(
        "answers",
        nargs="*",
        help=f"Answers to Q1..Q{len(SUS_QUESTIONS)} (1-5)"
    )

    subparsers.add_parser("results", help="Show all stored submissions")

    stats = subparsers.add_parser("stats", help="Show aggregate statistics")
    stats.add_argument("--json", action="store_true", help="Print the full statistics as JSON")

    export = subparsers.add_parser("export", help="Export all submissions to CSV")
    export.add_argument(
        "--output-dir",
        default=str(settings.EXPORT_ROOT),
        help=f"Export directory (default: {settings.EXPORT_ROOT})"
    )

    return parser


def run_start(service: SurveyService, args) -> int:
    try:
        nickname = service.start(args.nickname)
    except ValidationError as e:
        print(f"❌ {e}")
        return 1

    print(f"Welcome, {nickname}! Rate each statement from 1 (strongly disagree) to 5 (strongly agree):")
    for question in SUS_QUESTIONS:
        print(f"  Q{question.index + 1}. {question.text}")
    return 0


def build_form(nickname: str, answers) -> dict:
    """
    Turn command-line answers into a form payload (nickname, q0..q9).

    Raises:
        ValidationError: If the number of answers is not one per question
    """
    if len(answers) != len(SUS_QUESTIONS):
        raise ValidationError(
            f"Expected {len(SUS_QUESTIONS)} answers, got {len(answers)}."
        )

    form = {"nickname": nickname}
    for question, answer in zip(SUS_QUESTIONS, answers):
        form[question.form_field] = answer
    return form


def run_submit(service: SurveyService, args) -> int:
    try:
        form = build_form(args.nickname, args.answers)
    except ValidationError as e:
        print(f"❌ {e}")
        return 1

    outcome = service.submit(form)

    if outcome.error:
        print(f"❌ {outcome.error}")
        if outcome.nickname:
            print(f"Nickname kept: {outcome.nickname}")
        return 1

    print("=" * 60)
    print(f"SUS score for {outcome.nickname}: {outcome.score}")
    print(f"Rating: {outcome.interpretation.rating} (grade {outcome.interpretation.grade})")
    print("=" * 60)

    if outcome.storage_warning:
        print(f"⚠️  {outcome.storage_warning}")
        return 1
    return 0


def run_results(service: SurveyService, args) -> int:
    df = service.results()
    if df.empty:
        print("No submissions yet.")
    else:
        print(df.to_string(index=False))
    return 0


def run_stats(service: SurveyService, args) -> int:
    stats = service.statistics()

    if args.json:
        print(json.dumps(stats.to_dict(), indent=2))
        return 0

    print(f"Submissions: {stats.total_submissions}")
    print(statistics_table(stats).to_string(index=False))
    if stats.score_trend:
        print()
        print("Score trend:")
        for point in stats.score_trend:
            print(f"  {point.date}  {point.score}")
    return 0


def run_export(service: SurveyService, args) -> int:
    output_path = service.export(output_dir=args.output_dir)
    print(f"✅ Exported to {output_path}")
    return 0


COMMANDS = {
    "start": run_start,
    "submit": run_submit,
    "results": run_results,
    "stats": run_stats,
    "export": run_export,
}


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    repository = CsvResponseRepository(args.results_file)
    service = SurveyService(repository)

    try:
        exit_code = COMMANDS[args.command](service, args)
    except StorageUnavailable as e:
        logger.error(f"Storage unavailable: {e}")
        print(f"\n❌ Could not access stored results: {e}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
