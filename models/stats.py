from pydantic import BaseModel

class SessionSummary(BaseModel):
    total_words: int = 0
    learned_words: int = 0
    average_accuracy: float = 0.0
    streak: int = 0
    sessions_count: int = 0
    time_spent: int = 0

class TopicProgress(BaseModel):
    topic_id: str
    total: int = 0
    learned: int = 0
    percentage: float = 0.0
    accuracy: float = 0.0
    level: str = "needs_improvement"
