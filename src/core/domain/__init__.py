"""Domain models and entities.

Why:
- Pure data structures (Pydantic v2 models, enums) live here.
- The domain knows nothing about files, consoles or the CLI.
"""
