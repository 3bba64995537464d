"""
State of a single pipeline run: phase, intermediate values and the failure record.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class Phase(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Stage(str, Enum):
    """Pipeline stages that can fail."""
    KEY_VALIDATION = "key_validation"
    TITLE_RETRIEVAL = "title_retrieval"
    IDENTIFIER_EXTRACTION = "identifier_extraction"
    DATE_LOOKUP = "date_lookup"
    DATE_COMPUTATION = "date_computation"

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]


STAGE_LABELS = {
    Stage.KEY_VALIDATION: "APIキー検証",
    Stage.TITLE_RETRIEVAL: "ドキュメントタイトル取得",
    Stage.IDENTIFIER_EXTRACTION: "動画番号抽出",
    Stage.DATE_LOOKUP: "公開日取得 (スプレッドシート)",
    Stage.DATE_COMPUTATION: "初稿戻し日計算",
}


@dataclass(frozen=True)
class FailureRecord:
    stage: Stage
    message: str

    def __str__(self) -> str:
        return f"[{self.stage.label}] {self.message}"


@dataclass
class Run:
    """One submitted URL. Fields fill in as stages complete."""
    source_url: str = ""
    title: str | None = None
    video_number: str | None = None
    release_date: date | None = None
    deadline: date | None = None
    message: str | None = None
    phase: Phase = Phase.AWAITING_INPUT
    failure: FailureRecord | None = None

    def fail(self, stage: Stage, message: str) -> None:
        self.failure = FailureRecord(stage, message)
        self.phase = Phase.FAILED

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "url": self.source_url,
            "title": self.title,
            "video_number": self.video_number,
            "release_date": self.release_date.isoformat() if self.release_date else None,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "message": self.message,
            "error": (
                {"stage": self.failure.stage.value, "label": self.failure.stage.label, "message": self.failure.message}
                if self.failure
                else None
            ),
        }
