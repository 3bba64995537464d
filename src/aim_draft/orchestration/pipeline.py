"""
End-to-end pipeline: doc URL → title (Drive) → video number (Ollama) → release date (Sheet)
→ first-draft deadline → message to copy.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from ..config import AppConfig, load_config
from ..deadline import compute_deadline, format_japanese_date, parse_release_date
from ..doc_reader import fetch_title
from ..reasoning import extract_video_number
from ..sheet_reader.reader import find_release_date
from ..utils import mask_secret
from .run import FailureRecord, Phase, Run, Stage

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "予期せぬエラーが発生しました。"
INTERRUPTED_MESSAGE = "処理が中断されました。"
MESSAGE_TEMPLATE = "{title}\n{url}\n{deadline}までに初稿よろしくお願いいたします！"


@dataclass(frozen=True)
class StageOutcome:
    """Value produced by a stage, or the failure that stopped it."""
    value: Any = None
    failure: FailureRecord | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def _guarded(stage: Stage, fn: Callable[..., Any], *args, **kwargs) -> StageOutcome:
    """Call fn; an exception becomes a failure labeled with `stage`."""
    try:
        return StageOutcome(value=fn(*args, **kwargs))
    except Exception as e:
        logger.exception("Stage %s failed", stage.value)
        return StageOutcome(failure=FailureRecord(stage, str(e) or GENERIC_ERROR_MESSAGE))


def compose_message(title: str, url: str, deadline_text: str) -> str:
    return MESSAGE_TEMPLATE.format(title=title, url=url, deadline=deadline_text)


class DraftNoticePipeline:
    """
    Runs one URL at a time through the stages and keeps the current Run for display.
    Stage functions are injectable; defaults call the real services.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        title_fetcher: Callable[..., str | None] = fetch_title,
        number_extractor: Callable[..., str | None] = extract_video_number,
        date_finder: Callable[..., str | None] = find_release_date,
    ):
        self.config = config
        self.title_fetcher = title_fetcher
        self.number_extractor = number_extractor
        self.date_finder = date_finder
        self.run = Run()
        logger.debug("Google API key loaded: %s", mask_secret(config.google_api_key))
        key_failure = self._check_keys()
        if key_failure:
            self.run.fail(key_failure.stage, key_failure.message)

    def _check_keys(self) -> FailureRecord | None:
        missing = self.config.missing_keys()
        if not missing:
            return None
        return FailureRecord(
            Stage.KEY_VALIDATION,
            f"必要なAPIキーが利用できません。設定を確認してください。(未設定: {', '.join(missing)})",
        )

    def submit(self, url: str) -> Run:
        """Start a new run for `url` and drive it to SUCCEEDED or FAILED."""
        if self.run.phase is Phase.IN_PROGRESS:
            raise RuntimeError("A run is already in progress.")
        run = self.run = Run(source_url=url)

        key_failure = self._check_keys()
        if key_failure:
            run.fail(key_failure.stage, key_failure.message)
            return run

        run.phase = Phase.IN_PROGRESS
        try:
            return self._run_stages(run, url)
        finally:
            if run.phase is Phase.IN_PROGRESS:
                # Aborted by a BaseException such as KeyboardInterrupt
                run.fail(_pending_stage(run), INTERRUPTED_MESSAGE)

    def _run_stages(self, run: Run, url: str) -> Run:
        # 1. Document title
        outcome = self._title_step(url)
        if not outcome.ok:
            return self._fail(run, outcome)
        run.title = outcome.value

        # 2. Video number from the title
        outcome = self._number_step(run.title)
        if not outcome.ok:
            return self._fail(run, outcome)
        run.video_number = outcome.value

        # 3. Release date from the sheet
        outcome = self._lookup_step(run.video_number)
        if not outcome.ok:
            return self._fail(run, outcome)

        # 4. Deadline
        outcome = self._deadline_step(outcome.value)
        if not outcome.ok:
            return self._fail(run, outcome)
        run.release_date, run.deadline = outcome.value

        # 5. Message
        run.message = compose_message(run.title, url, format_japanese_date(run.deadline))
        run.phase = Phase.SUCCEEDED
        logger.info("Run succeeded for video %s (deadline %s)", run.video_number, run.deadline)
        return run

    def reset(self) -> Run:
        """Back to awaiting input. A key-validation failure survives the reset."""
        failure = self.run.failure
        self.run = Run()
        if failure is not None and failure.stage is Stage.KEY_VALIDATION:
            self.run.failure = failure
        return self.run

    def _fail(self, run: Run, outcome: StageOutcome) -> Run:
        logger.error("Run failed: %s", outcome.failure)
        run.fail(outcome.failure.stage, outcome.failure.message)
        return run

    def _title_step(self, url: str) -> StageOutcome:
        outcome = _guarded(Stage.TITLE_RETRIEVAL, self.title_fetcher, self.config.google_api_key, url)
        if outcome.ok and not outcome.value:
            return StageOutcome(failure=FailureRecord(
                Stage.TITLE_RETRIEVAL,
                "Googleドキュメントのタイトルを取得できませんでした。"
                "URLが正しいか、ドキュメントが共有されているか確認してください。",
            ))
        return outcome

    def _number_step(self, title: str) -> StageOutcome:
        outcome = _guarded(
            Stage.IDENTIFIER_EXTRACTION,
            self.number_extractor,
            self.config.llm_api_key,
            title,
            model=self.config.ollama_model,
            host=self.config.ollama_host,
        )
        if outcome.ok and not outcome.value:
            return StageOutcome(failure=FailureRecord(
                Stage.IDENTIFIER_EXTRACTION,
                f"タイトル「{title}」から3桁の動画番号を抽出できませんでした。",
            ))
        return outcome

    def _lookup_step(self, video_number: str) -> StageOutcome:
        outcome = _guarded(
            Stage.DATE_LOOKUP,
            self.date_finder,
            self.config.google_api_key,
            self.config.sheet,
            video_number,
        )
        if outcome.ok and not outcome.value:
            return StageOutcome(failure=FailureRecord(
                Stage.DATE_LOOKUP,
                f"動画番号「{video_number}」に対応する公開日がスプレッドシートで見つかりませんでした。"
                "シートの内容や共有設定を確認してください。",
            ))
        return outcome

    def _deadline_step(self, release_text: str) -> StageOutcome:
        """Value is (release_date, deadline)."""
        outcome = _guarded(Stage.DATE_COMPUTATION, _release_and_deadline, release_text)
        if not outcome.ok:
            return StageOutcome(failure=FailureRecord(
                Stage.DATE_COMPUTATION,
                f"初稿戻し日の計算に失敗しました。{outcome.failure.message}",
            ))
        return outcome


def _pending_stage(run: Run) -> Stage:
    """First stage whose output the run does not have yet."""
    if run.title is None:
        return Stage.TITLE_RETRIEVAL
    if run.video_number is None:
        return Stage.IDENTIFIER_EXTRACTION
    if run.deadline is None:
        return Stage.DATE_LOOKUP
    return Stage.DATE_COMPUTATION


def _release_and_deadline(release_text: str):
    release_date = parse_release_date(release_text)
    return release_date, compute_deadline(release_date)


def run_pipeline(url: str, config: AppConfig | None = None) -> Run:
    """One-shot run: load config from the environment if not given, submit `url`, return the Run."""
    pipeline = DraftNoticePipeline(config or load_config())
    return pipeline.submit(url)
