"""Cursor context: documents, classification, action and flag resolution."""

from .classifier import AnnotationClassifier, ContextClassifier
from .document import Position, TextDocument
from .flags import FlagCompletion, FlagContext, ParameterFlagFilter
from .resolver import ActionResolver, build_action_pattern

__all__ = (
    'ActionResolver',
    'AnnotationClassifier',
    'ContextClassifier',
    'FlagCompletion',
    'FlagContext',
    'ParameterFlagFilter',
    'Position',
    'TextDocument',
    'build_action_pattern',
)
