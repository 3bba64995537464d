"""
Orchestration: doc URL → title → video number → release date → first-draft deadline → message.
"""

from .pipeline import DraftNoticePipeline, run_pipeline
from .run import FailureRecord, Phase, Run, Stage

__all__ = ["DraftNoticePipeline", "run_pipeline", "FailureRecord", "Phase", "Run", "Stage"]
