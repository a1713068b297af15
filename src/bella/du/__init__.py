"""Dialogue understanding: intent classification and value extraction."""

from bella.du.extraction import extract_number, extract_yes_no, is_hedged
from bella.du.interpreter import KeywordInterpreter

__all__ = ["KeywordInterpreter", "extract_number", "extract_yes_no", "is_hedged"]
