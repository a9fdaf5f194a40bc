"""
CivicPulse - Government Service Feedback Sentiment Pipeline

CLI entry point for classifying feedback and generating office reports.
"""

import argparse
import logging
import sys

from civicpulse.orchestrator import FeedbackPipelineOrchestrator
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
        description="CivicPulse - Citizen Feedback Sentiment Reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify feedback and report on one office for June
  python main.py --input feedback.json --office-id office-12 \\
                 --office-name "Addis Ababa Revenue Office" \\
                 --start-date 2024-06-01 --end-date 2024-06-30

  # Report across all offices and all stored feedback
  python main.py --input feedback.json

Note: Set GOOGLE_API_KEY to enable Gemini-written reports.
Without it, reports are assembled from deterministic templates.
        """
    )

    parser.add_argument(
        "--input",
        required=True,
        help="JSON file containing a list of feedback submissions"
    )

    parser.add_argument("--office-id", help="Office to report on (default: all offices)")
    parser.add_argument("--office-name", help="Office display name used in the report")
    parser.add_argument("--start-date", help="Start of reporting period (YYYY-MM-DD)")
    parser.add_argument("--end-date", help="End of reporting period (YYYY-MM-DD)")

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Data directory (default: {settings.DATA_ROOT})"
    )

    parser.add_argument(
        "--output-root",
        default=str(settings.OUTPUT_ROOT),
        help=f"Trend table directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    if not settings.GOOGLE_API_KEY:
        logger.warning("GOOGLE_API_KEY not set, Gemini reports disabled")

    print("=" * 60)
    print("CivicPulse - Citizen Feedback Sentiment Reports")
    print("=" * 60)
    print(f"Input: {args.input}")
    print(f"Office: {args.office_name or args.office_id or 'all offices'}")
    print(f"Period: {args.start_date or settings.DEFAULT_START_LABEL} to {args.end_date or settings.DEFAULT_END_LABEL}")
    print("=" * 60)
    print()

    try:
        logger.info("Initializing CivicPulse pipeline...")
        orchestrator = FeedbackPipelineOrchestrator(
            data_root=args.data_root,
            output_root=args.output_root,
            api_key=settings.GOOGLE_API_KEY
        )

        report_path = orchestrator.run(
            input_path=args.input,
            office_id=args.office_id,
            office_name=args.office_name,
            start_date=args.start_date,
            end_date=args.end_date
        )

        print()
        print("=" * 60)
        print("✅ Pipeline completed successfully!")
        print("=" * 60)
        print(f"Report: {report_path}")
        print(f"Trend tables: {args.output_root}")
        print("=" * 60)

        logger.info("CivicPulse completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        print("\n⚠️  Pipeline interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        print(f"\n❌ Pipeline failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
