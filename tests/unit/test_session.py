from pathlib import Path
from unittest.mock import MagicMock

import pytest

from summarizer.batch.exporter import ArchiveExporter
from summarizer.batch.ledger import ResultLedger
from summarizer.batch.models import BatchConfig, LedgerSnapshot, ProcessingStatus
from summarizer.batch.orchestrator import BatchOrchestrator
from summarizer.batch.selection import NON_PDF_NOTICE
from summarizer.batch.session import (
    BATCH_RUNNING_MESSAGE,
    GEMINI_KEY_MISSING_BANNER,
    BatchSession,
    build_session,
)
from summarizer.config.settings import Settings
from summarizer.llm.example_client import ExampleSummaryClient
from summarizer.llm.models import Credentials, Provider
from summarizer.llm.prompt_builder import PromptBuilder


def _make_session(
    disabled: tuple[Provider, ...] = (),
) -> tuple[BatchSession, MagicMock]:
    pdf_extractor = MagicMock()
    pdf_extractor.extract.return_value = "some text"
    orchestrator = BatchOrchestrator(
        pdf_extractor=pdf_extractor,
        prompt_builder=PromptBuilder(),
        ledger=ResultLedger(),
    )
    session = BatchSession(
        orchestrator=orchestrator,
        exporter=ArchiveExporter(),
        client_factory=lambda _config: ExampleSummaryClient(),
        disabled_providers=disabled,
    )
    return session, pdf_extractor


def _pdfs(tmp_path: Path, *names: str) -> list[Path]:
    paths = []
    for name in names:
        path = tmp_path / name
        path.write_bytes(b"%PDF-1.4")
        paths.append(path)
    return paths


def _config(prompt: str = "Summarize", provider: Provider = Provider.EXAMPLE) -> BatchConfig:
    return BatchConfig(provider=provider, prompt=prompt)


class TestSelect:
    def test_non_pdf_files_are_dropped_with_notice(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        paths = _pdfs(tmp_path, "a.pdf", "b.docx")

        session.select(paths)

        assert [f.name for f in session.files] == ["a.pdf"]
        assert session.notice == NON_PDF_NOTICE

    def test_clean_selection_clears_notice(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        session.notice = "old"
        session.select(_pdfs(tmp_path, "a.pdf"))
        assert session.notice == ""

    def test_new_selection_discards_results(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        session.select(_pdfs(tmp_path, "a.pdf"))
        session.generate(_config())
        assert len(session.ledger) == 1

        session.select(_pdfs(tmp_path, "b.pdf"))

        assert len(session.ledger) == 0

    def test_missing_path_sets_notice(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        session.select([tmp_path / "gone.pdf"])
        assert "not found" in session.notice
        assert session.files == ()


class TestGenerate:
    def test_runs_batch(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        session.select(_pdfs(tmp_path, "a.pdf", "b.pdf"))

        assert session.generate(_config())

        entries = session.ledger.snapshot().entries
        assert [e.status for e in entries] == [ProcessingStatus.SUCCESS] * 2
        assert session.notice == ""

    def test_blank_prompt_sets_notice_without_ledger_change(self, tmp_path: Path) -> None:
        session, pdf_extractor = _make_session()
        session.select(_pdfs(tmp_path, "a.pdf"))

        assert not session.generate(_config(prompt="   "))

        assert "enter a prompt" in session.notice
        assert len(session.ledger) == 0
        pdf_extractor.extract.assert_not_called()

    def test_no_files_sets_notice(self) -> None:
        session, _ = _make_session()
        assert not session.generate(_config())
        assert session.notice

    def test_disabled_provider_sets_notice(self, tmp_path: Path) -> None:
        session, _ = _make_session(disabled=(Provider.GEMINI,))
        session.select(_pdfs(tmp_path, "a.pdf"))
        assert not session.generate(_config(provider=Provider.GEMINI))
        assert "gemini provider is not available" in session.notice

    def test_factory_value_error_sets_notice(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        session._client_factory = MagicMock(side_effect=ValueError("Unknown Gemini model"))
        session.select(_pdfs(tmp_path, "a.pdf"))
        assert not session.generate(_config())
        assert session.notice == "Unknown Gemini model"

    def test_rerun_replaces_previous_results(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        session.select(_pdfs(tmp_path, "a.pdf", "b.pdf"))
        session.generate(_config())
        first_ids = [e.id for e in session.ledger.snapshot().entries]

        session.generate(_config(prompt="Another prompt"))

        entries = session.ledger.snapshot().entries
        assert [e.id for e in entries] == first_ids
        assert len(entries) == 2


class TestGating:
    def test_can_generate_requires_files_and_prompt(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        assert not session.can_generate(_config())
        session.select(_pdfs(tmp_path, "a.pdf"))
        assert session.can_generate(_config())
        assert not session.can_generate(_config(prompt=" "))

    def test_volcano_requires_key(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        session.select(_pdfs(tmp_path, "a.pdf"))
        assert not session.can_generate(_config(provider=Provider.VOLCANO))
        with_key = BatchConfig(
            provider=Provider.VOLCANO, prompt="p", credentials=Credentials(api_key="k")
        )
        assert session.can_generate(with_key)

    def test_disabled_gemini_blocks_generate_and_shows_banner(self, tmp_path: Path) -> None:
        session, _ = _make_session(disabled=(Provider.GEMINI,))
        session.select(_pdfs(tmp_path, "a.pdf"))
        assert session.banner == GEMINI_KEY_MISSING_BANNER
        assert not session.can_generate(_config(provider=Provider.GEMINI))

    def test_no_banner_when_gemini_enabled(self) -> None:
        session, _ = _make_session()
        assert session.banner is None

    def test_can_download_only_after_a_batch(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        assert not session.can_download
        session.select(_pdfs(tmp_path, "a.pdf"))
        session.generate(_config())
        assert session.can_download


class TestDownload:
    def test_writes_archive(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        session.select(_pdfs(tmp_path, "a.pdf"))
        session.generate(_config())

        archive = session.download(tmp_path / "out")

        assert archive is not None
        assert archive.name == "pdf_summaries.zip"

    def test_no_success_sets_notice(self, tmp_path: Path) -> None:
        session, pdf_extractor = _make_session()
        pdf_extractor.extract.return_value = ""
        session.select(_pdfs(tmp_path, "a.pdf"))
        session.generate(_config())

        assert session.download(tmp_path / "out") is None
        assert session.notice == "No successful summaries to download."
        assert not (tmp_path / "out").exists()

    def test_dismiss_notice(self) -> None:
        session, _ = _make_session()
        session.notice = "something"
        session.dismiss_notice()
        assert session.notice == ""


class TestBuildSession:
    @pytest.fixture(autouse=True)
    def _isolate_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    def test_missing_gemini_key_disables_gemini(self) -> None:
        session = build_session(Settings())
        assert not session.is_provider_enabled(Provider.GEMINI)
        assert session.banner == GEMINI_KEY_MISSING_BANNER

    def test_gemini_key_enables_gemini(self) -> None:
        session = build_session(Settings(gemini_api_key="k"))
        assert session.is_provider_enabled(Provider.GEMINI)
        assert session.banner is None


class TestRunningBatchGuard:
    def test_select_during_batch_keeps_selection_and_ledger_in_sync(
        self, tmp_path: Path
    ) -> None:
        session, _ = _make_session()
        first, second = _pdfs(tmp_path, "a.pdf", "b.pdf")
        session.select([first])
        attempted: list[bool] = []

        def reselect(snapshot: LedgerSnapshot) -> None:
            if snapshot.is_running and not attempted:
                attempted.append(True)
                session.select([second])

        session.ledger.subscribe(reselect)
        session.generate(_config())

        assert attempted
        assert [f.name for f in session.files] == ["a.pdf"]
        assert [e.file_name for e in session.ledger.snapshot().entries] == ["a.pdf"]
        assert session.ledger.snapshot().entries[0].status is ProcessingStatus.SUCCESS

    def test_select_during_batch_sets_notice(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        first, second = _pdfs(tmp_path, "a.pdf", "b.pdf")
        session.select([first])
        notices: list[str] = []

        def reselect(snapshot: LedgerSnapshot) -> None:
            if snapshot.is_running and not notices:
                session.select([second])
                notices.append(session.notice)

        session.ledger.subscribe(reselect)
        session.generate(_config())

        assert notices == [BATCH_RUNNING_MESSAGE]

    def test_generate_during_batch_is_blocked(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        session.select(_pdfs(tmp_path, "a.pdf"))
        nested: list[bool] = []

        def regenerate(snapshot: LedgerSnapshot) -> None:
            if snapshot.is_running and not nested:
                nested.append(session.generate(_config()))

        session.ledger.subscribe(regenerate)
        assert session.generate(_config())

        assert nested == [False]
        assert len(session.ledger) == 1


class TestClientLifecycle:
    def test_client_is_closed_after_batch(self, tmp_path: Path) -> None:
        session, _ = _make_session()
        client = MagicMock(wraps=ExampleSummaryClient())
        client.provider_name = "example"
        session._client_factory = lambda _config: client
        session.select(_pdfs(tmp_path, "a.pdf"))

        session.generate(_config())

        client.close.assert_called_once_with()

    def test_client_is_closed_when_batch_is_blocked(self) -> None:
        session, _ = _make_session()
        client = MagicMock(wraps=ExampleSummaryClient())
        client.provider_name = "example"
        session._client_factory = lambda _config: client

        assert not session.generate(_config())

        client.close.assert_called_once_with()
