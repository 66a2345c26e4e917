"""Command-line entry point.

Usage:
    authentiometer models gemini
    authentiometer analyze --mode gemini --url https://www.youtube.com/watch?v=... --model gemini-2.0-flash
    authentiometer analyze --mode groq --text-file transcript.txt --lang fr --json
    authentiometer analyze --mode groq --text "..." --markdown
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.text import Text

from .credentials import settings_credentials, static_credentials
from .errors import AuthentiometerError, ValidationError
from .log import get_logger, setup_logging
from .messages import msg
from .pipeline.run import AnalysisPipeline
from .rendering.summary import render_summary, render_summary_markdown
from .schemas.request import AnalysisOptions, AnalysisRequest, Language, Mode, ProviderKind

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="authentiometer", description="Trust assessment of video content.")
    sub = parser.add_subparsers(dest="command", required=True)

    models = sub.add_parser("models", help="List models usable for analysis")
    models.add_argument("provider", choices=[k.value for k in ProviderKind])
    models.add_argument("--api-key", help="Overrides GEMINI_API_KEY / GROQ_API_KEY")
    models.add_argument("--lang", choices=[lang.value for lang in Language], default=Language.EN.value)

    analyze = sub.add_parser("analyze", help="Analyze a YouTube video (gemini) or pasted text (groq)")
    analyze.add_argument("--mode", choices=[m.value for m in Mode], default=Mode.GEMINI.value)
    analyze.add_argument("--url", help="YouTube URL (required in gemini mode, context only in groq mode)")
    text = analyze.add_mutually_exclusive_group()
    text.add_argument("--text", help="Transcript or summary to analyze (groq mode)")
    text.add_argument("--text-file", type=Path, help="Read the text to analyze from a file (groq mode)")
    analyze.add_argument("--lang", choices=[lang.value for lang in Language], default=Language.EN.value)
    analyze.add_argument("--model", help="Model id (defaults to MODEL_GEMINI / MODEL_GROQ)")
    analyze.add_argument("--api-key", help="Overrides GEMINI_API_KEY / GROQ_API_KEY")
    analyze.add_argument("--no-authenticity", action="store_true", help="Skip the authenticity dimension")
    analyze.add_argument("--no-fact-checking", action="store_true", help="Skip the fact-checking dimension")
    analyze.add_argument("--no-science", action="store_true", help="Skip the scientific soundness dimension")
    analyze.add_argument("--no-cautious", action="store_true", help="Turn off cautious mode")
    output = analyze.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print the raw result JSON")
    output.add_argument("--markdown", action="store_true", help="Print the summary as Markdown text")
    return parser


def request_from_args(args: argparse.Namespace) -> AnalysisRequest:
    raw_text = args.text
    if args.text_file is not None:
        try:
            raw_text = args.text_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ValidationError(
                msg(Language(args.lang), "text_file_unreadable", path=args.text_file, reason=e.__class__.__name__)
            ) from e
    return AnalysisRequest(
        mode=Mode(args.mode),
        language=Language(args.lang),
        options=AnalysisOptions(
            include_authenticity=not args.no_authenticity,
            include_fact_checking=not args.no_fact_checking,
            include_scientific_soundness=not args.no_science,
            cautious_mode=not args.no_cautious,
        ),
        source_reference=args.url,
        raw_text=raw_text,
        model=args.model,
    )


def _pipeline(args: argparse.Namespace, kind: ProviderKind) -> AnalysisPipeline:
    credentials = settings_credentials()
    if args.api_key:
        credentials = static_credentials({kind: args.api_key}, fallback=credentials)
    return AnalysisPipeline(credentials=credentials)


def run_models(args: argparse.Namespace, console: Console) -> None:
    kind = ProviderKind(args.provider)
    language = Language(args.lang)
    pipeline = _pipeline(args, kind)
    label = pipeline.provider_for(kind).label
    with console.status(msg(language, "status_loading_models", provider=label)):
        models = pipeline.list_models(kind, language=language)
    if not models:
        console.print(msg(language, "no_models", provider=label))
        return
    for model_id in models:
        console.print(model_id, highlight=False)


def run_analyze(args: argparse.Namespace, console: Console) -> None:
    request = request_from_args(args)
    pipeline = _pipeline(args, ProviderKind(request.mode))
    with console.status(msg(request.language, "status_preparing")) as status:
        result = pipeline.run(request, on_status=status.update)
    if args.json:
        console.print_json(result.to_json())
    elif args.markdown:
        console.print(render_summary_markdown(result, request.language), markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(render_summary(result, request.language))


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    setup_logging()
    args = build_parser().parse_args(argv)
    console = Console()

    try:
        if args.command == "models":
            run_models(args, console)
        else:
            run_analyze(args, console)
    except AuthentiometerError as e:
        logger.debug("Run failed", exc_info=True)
        console.print(Text(str(e), style="bold red"))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
