import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from summarizer.batch.models import BatchConfig, LedgerSnapshot, ProcessingStatus
from summarizer.batch.session import BatchSession, build_session
from summarizer.config.settings import Settings
from summarizer.llm.factory import SummaryClientFactory
from summarizer.llm.models import Credentials, Provider
from summarizer.logging.logger import Log


def parse_args(argv: Sequence[str] | None, settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pdf-batch-summarizer",
        description="Summarize a batch of PDF files with a single prompt.",
    )
    parser.add_argument("paths", nargs="+", type=Path, help="PDF files or folders of PDFs")
    parser.add_argument("--prompt", default=settings.default_prompt)
    parser.add_argument(
        "--provider",
        default=settings.llm_provider,
        choices=[p.value for p in Provider],
    )
    parser.add_argument(
        "--model",
        default=settings.gemini_model_name,
        choices=settings.gemini_models,
        help="Gemini model (gemini provider only)",
    )
    parser.add_argument(
        "--api-key",
        default=settings.volcano_api_key,
        help="Volcano Engine API key (volcano provider only)",
    )
    parser.add_argument("--output", type=Path, default=Path(settings.output_dir))
    return parser.parse_args(argv)


def _log_progress(snapshot: LedgerSnapshot) -> None:
    done = sum(1 for e in snapshot.entries if e.status.is_terminal)
    Log.debug(f"Progress: {done}/{len(snapshot.entries)} files finished")


def _report(session: BatchSession) -> None:
    for entry in session.ledger.snapshot().entries:
        if entry.status is ProcessingStatus.SUCCESS:
            print(f"[ok]    {entry.file_name}")
        else:
            print(f"[error] {entry.file_name}: {entry.error}")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: select files -> run batch -> report -> write archive."""
    settings = Settings()
    Log.configure(settings.log_level)
    args = parse_args(argv, settings)

    session = build_session(settings)
    if session.banner:
        Log.warning(session.banner)
    session.ledger.subscribe(_log_progress)

    session.select(args.paths)
    if session.notice:
        print(f"Notice: {session.notice}", file=sys.stderr)

    config = BatchConfig(
        provider=SummaryClientFactory.parse_provider(args.provider),
        prompt=args.prompt,
        model=args.model,
        credentials=Credentials(api_key=args.api_key or ""),
    )
    if not session.generate(config):
        print(f"Notice: {session.notice}", file=sys.stderr)
        return 2

    _report(session)
    if session.can_download:
        archive = session.download(args.output)
        if archive is None:
            print(f"Notice: {session.notice}", file=sys.stderr)
        else:
            print(f"Summaries written to {archive}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
