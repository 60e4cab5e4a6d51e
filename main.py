"""
Insightify - Review Dashboard

CLI entry point for the review workflow.
"""

import argparse
import asyncio
import json
import logging
import sys

from insightify.orchestrator import DashboardOrchestrator
from insightify.models.review import Language
import config.settings as settings

TARGET_LANGUAGES = [lang.value for lang in Language if lang is not Language.OTHER]


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Insightify - Review dashboard workflow",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Dashboard summary from the seed data
  python main.py summary

  # Translate every review into English
  python main.py translate --lang English

  # Draft and submit a reply for review 1
  python main.py respond --id 1 --draft

  # Use live Google Places data
  python main.py --place-id ChIJN1t_tDeuEmsRUsoyG83frY4 summary

Note: Set GOOGLE_API_KEY for Gemini features and GOOGLE_MAPS_API_KEY for live places.
        """
    )

    parser.add_argument(
        "--place-id",
        action="append",
        default=None,
        help="Google place id to load (repeatable). Disables mock data."
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("summary", help="Print dashboard summary")

    reviews = subparsers.add_parser("reviews", help="List reviews")
    reviews.add_argument(
        "--filter",
        default="all",
        choices=["all", "responded", "not-responded"],
        help="Response status filter (default: all)"
    )

    translate = subparsers.add_parser("translate", help="Translate reviews")
    translate.add_argument("--lang", required=True, choices=TARGET_LANGUAGES)
    translate.add_argument("--id", help="Review id (default: all reviews)")

    respond = subparsers.add_parser("respond", help="Respond to a review")
    respond.add_argument("--id", required=True, help="Review id")
    respond.add_argument("--text", help="Response text to submit")
    respond.add_argument(
        "--draft",
        action="store_true",
        help="Draft the response with the AI writer"
    )

    subparsers.add_parser("digest", help="Summarize all review text")

    export = subparsers.add_parser("export", help="Export summary CSV + metadata")
    export.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    return parser


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def run_command(args, orchestrator: DashboardOrchestrator) -> int:
    """Execute one CLI command. Returns the process exit code."""
    if args.command == "summary":
        _print_json(orchestrator.summary())

    elif args.command == "reviews":
        _print_json([r.to_dict() for r in orchestrator.reviews(args.filter)])

    elif args.command == "translate":
        if args.id:
            review = asyncio.run(orchestrator.translate(args.id, args.lang))
            if review is None:
                print(f"Review {args.id} not found")
                return 1
            _print_json(review.to_dict())
        else:
            reviews = asyncio.run(orchestrator.translate_all(args.lang))
            _print_json([r.to_dict() for r in reviews])

    elif args.command == "respond":
        if orchestrator.store.get_by_id(args.id) is None:
            print(f"Review {args.id} not found")
            return 1

        text = args.text
        if args.draft and not text:
            text = asyncio.run(orchestrator.draft_response(args.id))

        if text:
            submitted = orchestrator.submit_response(args.id, text)
        else:
            submitted = orchestrator.mark_responded(args.id)

        review = orchestrator.store.get_by_id(args.id)
        if not submitted:
            print(f"Review {args.id} was already responded")
        _print_json(review.to_dict())

    elif args.command == "digest":
        print(asyncio.run(orchestrator.summarize_reviews()))

    elif args.command == "export":
        output_path = orchestrator.export(args.output_dir)
        print(f"Summary table: {output_path}")
        print(f"Metadata: {output_path.replace('.csv', '_metadata.json')}")

    return 0


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    place_ids = args.place_id or settings.PLACE_IDS
    use_mock_data = settings.USE_MOCK_DATA and not args.place_id

    if not use_mock_data and not settings.GOOGLE_MAPS_API_KEY:
        logger.error(
            "GOOGLE_MAPS_API_KEY environment variable not set. "
            "Set it or run with mock data."
        )
        sys.exit(1)

    try:
        orchestrator = DashboardOrchestrator(
            gemini_api_key=settings.GOOGLE_API_KEY,
            maps_api_key=settings.GOOGLE_MAPS_API_KEY,
            use_mock_data=use_mock_data
        )
        count = orchestrator.load(place_ids)
        logger.info(f"Loaded {count} reviews")

        sys.exit(run_command(args, orchestrator))

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Command failed: {e}", exc_info=True)
        print(f"\n❌ Command failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
