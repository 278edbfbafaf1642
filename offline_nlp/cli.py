"""
Offline NLP - CLI.

============================================================
RESPONSIBILITY
============================================================
Command-line interface for the offline analyzer.

- Provides argparse-based CLI
- Loads configuration from CLI and environment
- Prints JSON results to stdout, logs to stderr

============================================================
USAGE
============================================================
offline-nlp analyze "I need to finish the report by Friday."
offline-nlp analyze --file notes.txt --pretty
echo "what a great day" | offline-nlp quick
offline-nlp stats
offline-nlp serve --port 8765

============================================================
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from .api import run_server
from .config import LOG_FORMATS, LOG_LEVELS, EngineConfig, ProcessingOptions, setup_logging
from .engine import AnalysisPipeline, create_engine
from .exceptions import OfflineNLPError


# ============================================================
# CLI ARGUMENT PARSER
# ============================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    # --------------------------------------------------------
    # Logging Options (shared by every command)
    # --------------------------------------------------------
    common = argparse.ArgumentParser(add_help=False)
    logging_group = common.add_argument_group("Logging Options")

    logging_group.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: OFFLINE_NLP_LOG_LEVEL or INFO)",
    )

    logging_group.add_argument(
        "--log-format",
        type=str.lower,
        choices=LOG_FORMATS,
        default=None,
        help="Logging format (default: OFFLINE_NLP_LOG_FORMAT or text)",
    )

    parser = argparse.ArgumentParser(
        prog="offline-nlp",
        description="On-device transcript analysis: sentiment, action items, topics, insights",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  analyze   - Run the full analysis pipeline
  quick     - Count-only sentiment estimate
  stats     - Show dictionary and pattern statistics
  serve     - Run the local HTTP API

Examples:
  %(prog)s analyze "Call the dentist tomorrow." --pretty
  %(prog)s analyze --file transcript.txt --skip-topics
  %(prog)s quick "this is terrible"
        """,
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version="%(prog)s 1.0.0",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    # --------------------------------------------------------
    # analyze
    # --------------------------------------------------------
    analyze = commands.add_parser(
        "analyze",
        parents=[common],
        help="Run the full analysis pipeline",
    )
    analyze.add_argument(
        "text",
        nargs="?",
        help="Text to analyze (default: read --file or stdin)",
    )
    analyze.add_argument(
        "--file", "-f",
        type=str,
        metavar="PATH",
        help="Read text from a UTF-8 file",
    )

    stage_group = analyze.add_argument_group("Stage Options")
    stage_group.add_argument("--skip-sentiment", action="store_true", help="Skip sentiment analysis")
    stage_group.add_argument("--skip-action-items", action="store_true", help="Skip action item detection")
    stage_group.add_argument("--skip-topics", action="store_true", help="Skip topic extraction")
    stage_group.add_argument("--skip-insights", action="store_true", help="Skip insight generation")

    output_group = analyze.add_argument_group("Output Options")
    output_group.add_argument("--pretty", action="store_true", help="Indent JSON output")

    # --------------------------------------------------------
    # quick
    # --------------------------------------------------------
    quick = commands.add_parser(
        "quick",
        parents=[common],
        help="Count-only sentiment estimate",
    )
    quick.add_argument("text", nargs="?", help="Text to score (default: stdin)")

    # --------------------------------------------------------
    # stats
    # --------------------------------------------------------
    commands.add_parser(
        "stats",
        parents=[common],
        help="Show dictionary and pattern statistics",
    )

    # --------------------------------------------------------
    # serve
    # --------------------------------------------------------
    serve = commands.add_parser(
        "serve",
        parents=[common],
        help="Run the local HTTP API",
    )
    serve.add_argument("--host", type=str, default=None, help="Bind host (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: 8765)")

    return parser


# ============================================================
# CLI CONFIGURATION BUILDER
# ============================================================

def build_config(args: argparse.Namespace) -> EngineConfig:
    """
    Build engine configuration from environment, overridden by CLI arguments.
    """
    config = EngineConfig.from_env()

    if args.log_level:
        config.log_level = args.log_level
    if args.log_format:
        config.log_format = args.log_format
    if getattr(args, "host", None):
        config.api_host = args.host
    if getattr(args, "port", None):
        config.api_port = args.port

    return config


def build_options(args: argparse.Namespace) -> ProcessingOptions:
    return ProcessingOptions(
        skip_sentiment=args.skip_sentiment,
        skip_action_items=args.skip_action_items,
        skip_topics=args.skip_topics,
        skip_insights=args.skip_insights,
    )


def read_text(args: argparse.Namespace) -> str:
    """Resolve input text from the positional argument, --file, or stdin."""
    if getattr(args, "file", None):
        return Path(args.file).read_text(encoding="utf-8")
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def emit(data: Any, pretty: bool = False) -> None:
    print(json.dumps(data, indent=2 if pretty else None, ensure_ascii=False))


# ============================================================
# COMMANDS
# ============================================================

def run_command(args: argparse.Namespace, engine: AnalysisPipeline) -> int:
    if args.command == "analyze":
        result = engine.process_text(read_text(args), build_options(args))
        print(result.to_json(indent=2 if args.pretty else None))
        return 0

    if args.command == "quick":
        emit(engine.quick_sentiment(read_text(args)).to_dict())
        return 0

    if args.command == "stats":
        emit(engine.get_stats(), pretty=True)
        return 0

    if args.command == "serve":
        run_server(engine, engine.config.api_host, engine.config.api_port)
        return 0

    return 2


# ============================================================
# MAIN ENTRY POINT
# ============================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: invalid environment configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_format, stream=sys.stderr)

    try:
        engine = create_engine(config)
        return run_command(args, engine)
    except OfflineNLPError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read input: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
