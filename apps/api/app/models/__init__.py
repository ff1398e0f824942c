from app.models.learning_content import LearningContent

__all__ = ["LearningContent"]
