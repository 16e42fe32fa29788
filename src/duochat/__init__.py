"""
duochat: a small chat service that routes prompts to Gemini or Cysic.

Each module hides one design decision: ``llm`` the vendor SDKs, ``router``
the dispatch rule and message assembly, ``api`` the HTTP boundary, ``ui`` the
terminal chat client.
"""

__version__ = "0.1.0"
