"""Custom exceptions for quiz generation and scoring."""


class QuizError(Exception):
    """Base exception for quiz errors."""
    pass


class ValidationError(QuizError):
    """Missing form fields, bad answers or unanswered questions."""
    pass


class ApiError(QuizError):
    """Chat-completion call failed: rejected key, network error or bad response."""
    pass


class ParseError(ApiError):
    """Response text held no recoverable JSON array of questions."""
    pass
