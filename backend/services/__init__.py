"""Services for Athena Study Assistant."""
from .query_classifier import QueryClassifier, Classification, Category, extract_topics, academic_domain
from .response_generator import ResponseGenerator
from .rendering import render_code_blocks, format_time
from .preferences_store import PreferencesStore
from .session_timer import SessionTimer
from .study_assistant import StudyAssistant, PresentationPort, ConsolePresentation
from .mock_academic import MockAcademicService, ResearchSearchError, ServiceError

__all__ = ['QueryClassifier', 'Classification', 'Category', 'extract_topics', 'academic_domain', 'ResponseGenerator', 'render_code_blocks', 'format_time', 'PreferencesStore', 'SessionTimer', 'StudyAssistant', 'PresentationPort', 'ConsolePresentation', 'MockAcademicService', 'ResearchSearchError', 'ServiceError']
