from .cysic import CysicProvider
from .gemini import GeminiProvider

__all__ = ["CysicProvider", "GeminiProvider"]
