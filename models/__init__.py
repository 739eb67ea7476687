from .topic import Topic, TopicCreate, TopicUpdate
from .vocabulary import Vocabulary, VocabularyCreate, VocabularyUpdate, Difficulty
from .progress import ProgressRecord, Outcome, AnswerCreate
from .session import LearningSession, LearningSessionCreate, SessionType
from .stats import SessionSummary, TopicProgress
from .quiz import QuizQuestion, QuizAnswer, QuizCompletion, OPTIONS_PER_QUESTION

__all__ = [
    'Topic', 'TopicCreate', 'TopicUpdate',
    'Vocabulary', 'VocabularyCreate', 'VocabularyUpdate', 'Difficulty',
    'ProgressRecord', 'Outcome', 'AnswerCreate',
    'LearningSession', 'LearningSessionCreate', 'SessionType',
    'SessionSummary', 'TopicProgress',
    'QuizQuestion', 'QuizAnswer', 'QuizCompletion', 'OPTIONS_PER_QUESTION',
]
