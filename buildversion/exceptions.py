#!/usr/bin/env python3
"""
Version Template Exception Classes
"""

from typing import Optional


class VersionTemplateError(Exception):
    """Base exception for user-facing template and version errors"""
    pass


class TemplateSyntaxError(VersionTemplateError, ValueError):
    """Raised when a template string fails validation"""

    def __init__(self, message: str, index: Optional[int] = None, letter: Optional[str] = None):
        super().__init__(message)
        self.index = index
        self.letter = letter


class VersionParseError(VersionTemplateError, ValueError):
    """Raised when a candidate string cannot be parsed against a template"""

    def __init__(self, message: str, position: int = 0):
        super().__init__(message)
        self.position = position


class ConsistencyError(RuntimeError):
    """Raised when a rendered version does not match its own recognizer.

    This signals a defect in the engine (or an explicit recognizer that
    disagrees with its template), never bad user input.
    """
    pass
