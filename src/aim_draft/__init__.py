"""
AIM draft notice generator.
Instruction doc URL → title (Drive) → video number (LLM) → release date (Sheet) → first-draft deadline.
"""

__version__ = "0.1.0"
