"""
Reasoning layer (Ollama): pulls the video number out of a document title.
"""

from .video_number import extract_video_number, parse_video_number

__all__ = ["extract_video_number", "parse_video_number"]
