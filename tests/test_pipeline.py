from datetime import date

import pytest

from aim_draft.config import AppConfig, build_sheet_range
from aim_draft.errors import SheetLookupError, TitleRetrievalError
from aim_draft.orchestration import DraftNoticePipeline, Phase, Stage, run_pipeline
from aim_draft.orchestration.__main__ import print_run

URL = "https://docs.google.com/document/d/ABC123/edit"
TITLE = "第045回配信指示書"


def make_config(google_api_key="g-key", llm_api_key="o-key"):
    return AppConfig(
        google_api_key=google_api_key,
        llm_api_key=llm_api_key,
        sheet=build_sheet_range(spreadsheet_id="sheet-123"),
        ollama_model="test-model",
        ollama_host="http://ollama.test",
    )


class Stages:
    """Fake stage functions with canned results; records calls."""

    def __init__(self, title=TITLE, number="045", release="2024-05-13"):
        self.title = title
        self.number = number
        self.release = release
        self.calls = []

    def _result(self, value):
        if isinstance(value, BaseException):
            raise value
        return value

    def fetch_title(self, api_key, url):
        self.calls.append(("title", api_key, url))
        return self._result(self.title)

    def extract_number(self, api_key, title, *, model, host):
        self.calls.append(("number", api_key, title, model, host))
        return self._result(self.number)

    def find_date(self, api_key, range_ref, video_number):
        self.calls.append(("date", api_key, range_ref.spreadsheet_id, video_number))
        return self._result(self.release)


def make_pipeline(stages, config=None):
    return DraftNoticePipeline(
        config or make_config(),
        title_fetcher=stages.fetch_title,
        number_extractor=stages.extract_number,
        date_finder=stages.find_date,
    )


def test_end_to_end_success():
    stages = Stages()
    pipeline = make_pipeline(stages)
    assert pipeline.run.phase is Phase.AWAITING_INPUT

    run = pipeline.submit(URL)

    assert run.phase is Phase.SUCCEEDED
    assert run.failure is None
    assert run.title == TITLE
    assert run.video_number == "045"
    assert run.release_date == date(2024, 5, 13)
    assert run.deadline == date(2024, 5, 1)
    assert run.message.split("\n") == [
        TITLE,
        URL,
        "2024年5月1日までに初稿よろしくお願いいたします！",
    ]
    assert stages.calls == [
        ("title", "g-key", URL),
        ("number", "o-key", TITLE, "test-model", "http://ollama.test"),
        ("date", "g-key", "sheet-123", "045"),
    ]


def test_missing_keys_fail_at_construction_and_submit():
    stages = Stages()
    pipeline = make_pipeline(stages, make_config(google_api_key=None))
    assert pipeline.run.phase is Phase.FAILED
    assert pipeline.run.failure.stage is Stage.KEY_VALIDATION
    assert "GOOGLE_API_KEY" in pipeline.run.failure.message

    run = pipeline.submit(URL)
    assert run.phase is Phase.FAILED
    assert run.failure.stage is Stage.KEY_VALIDATION
    assert stages.calls == []


def test_reset_keeps_key_validation_failure():
    pipeline = make_pipeline(Stages(), make_config(llm_api_key=""))
    run = pipeline.reset()
    assert run.phase is Phase.AWAITING_INPUT
    assert run.failure.stage is Stage.KEY_VALIDATION
    assert "OLLAMA_API_KEY" in run.failure.message


def test_empty_title_is_title_failure():
    pipeline = make_pipeline(Stages(title=None))
    run = pipeline.submit(URL)
    assert run.phase is Phase.FAILED
    assert run.failure.stage is Stage.TITLE_RETRIEVAL
    assert run.title is None


def test_title_exception_message_is_kept():
    pipeline = make_pipeline(Stages(title=TitleRetrievalError("Google Document not found.")))
    run = pipeline.submit(URL)
    assert run.failure.stage is Stage.TITLE_RETRIEVAL
    assert run.failure.message == "Google Document not found."


def test_exception_without_message_gets_generic_text():
    pipeline = make_pipeline(Stages(title=RuntimeError()))
    run = pipeline.submit(URL)
    assert run.failure.stage is Stage.TITLE_RETRIEVAL
    assert run.failure.message == "予期せぬエラーが発生しました。"


def test_missing_number_names_the_title():
    pipeline = make_pipeline(Stages(number=None))
    run = pipeline.submit(URL)
    assert run.failure.stage is Stage.IDENTIFIER_EXTRACTION
    assert TITLE in run.failure.message
    assert run.title == TITLE
    assert run.video_number is None


def test_missing_release_date_names_the_number():
    stages = Stages(release=None)
    run = make_pipeline(stages).submit(URL)
    assert run.failure.stage is Stage.DATE_LOOKUP
    assert "「045」" in run.failure.message
    assert run.video_number == "045"


def test_sheet_error_is_date_lookup_failure():
    run = make_pipeline(Stages(release=SheetLookupError("Google Sheets API request failed: 403."))).submit(URL)
    assert run.failure.stage is Stage.DATE_LOOKUP
    assert "403" in run.failure.message


def test_invalid_release_date_is_computation_failure():
    run = make_pipeline(Stages(release="2024-13-45")).submit(URL)
    assert run.phase is Phase.FAILED
    assert run.failure.stage is Stage.DATE_COMPUTATION
    assert run.release_date is None
    assert run.deadline is None


def test_reset_after_failure_clears_everything():
    pipeline = make_pipeline(Stages(number=None))
    pipeline.submit(URL)
    run = pipeline.reset()
    assert run.phase is Phase.AWAITING_INPUT
    assert run.failure is None
    assert run.title is None
    assert run.source_url == ""


def test_resubmit_after_reset_is_identical():
    pipeline = make_pipeline(Stages())
    first = pipeline.submit(URL).to_dict()
    pipeline.reset()
    second = pipeline.submit(URL).to_dict()
    assert first == second
    assert second["phase"] == "succeeded"


def test_new_submit_replaces_previous_failure():
    stages = Stages(number=None)
    pipeline = make_pipeline(stages)
    assert pipeline.submit(URL).phase is Phase.FAILED
    stages.number = "045"
    run = pipeline.submit(URL)
    assert run.phase is Phase.SUCCEEDED
    assert run.failure is None


def test_submit_while_in_progress_is_rejected():
    pipeline = make_pipeline(Stages())
    pipeline.run.phase = Phase.IN_PROGRESS
    with pytest.raises(RuntimeError):
        pipeline.submit(URL)


def test_run_pipeline_rejects_bad_url_before_any_request():
    run = run_pipeline("https://example.com/not-a-doc", make_config())
    assert run.phase is Phase.FAILED
    assert run.failure.stage is Stage.TITLE_RETRIEVAL
    assert "https://example.com/not-a-doc" in run.failure.message


def test_print_run_shows_message(capsys):
    run = make_pipeline(Stages()).submit(URL)
    print_run(run)
    out = capsys.readouterr().out
    assert "First draft due: 2024年5月1日" in out
    assert out.rstrip().endswith("2024年5月1日までに初稿よろしくお願いいたします！")


def test_print_run_shows_stage_label(capsys):
    run = make_pipeline(Stages(number=None)).submit(URL)
    print_run(run)
    out = capsys.readouterr().out
    assert out.startswith("Error: [動画番号抽出]")


def test_full_width_sheet_date_is_lookup_failure():
    from aim_draft.sheet_reader.reader import scan_rows

    row = [""] * 23
    row[0] = "045"
    row[22] = "２０２４-０５-１３"

    def find_date(api_key, range_ref, video_number):
        return scan_rows([row], range_ref, video_number)

    pipeline = DraftNoticePipeline(
        make_config(),
        title_fetcher=Stages().fetch_title,
        number_extractor=Stages().extract_number,
        date_finder=find_date,
    )
    run = pipeline.submit(URL)
    assert run.failure.stage is Stage.DATE_LOOKUP


def test_interrupted_run_does_not_stay_in_progress():
    stages = Stages(number=KeyboardInterrupt())
    pipeline = make_pipeline(stages)
    with pytest.raises(KeyboardInterrupt):
        pipeline.submit(URL)
    assert pipeline.run.phase is Phase.FAILED
    assert pipeline.run.failure.stage is Stage.IDENTIFIER_EXTRACTION

    stages.number = "045"
    run = pipeline.submit(URL)
    assert run.phase is Phase.SUCCEEDED
