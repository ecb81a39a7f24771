from .deepseek import DeepSeekCompletionClient

__all__ = ["DeepSeekCompletionClient"]
