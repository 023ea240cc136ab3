from gitcal.api.v1 import auth, git, llm, notion

__all__ = [
    "auth",
    "git",
    "llm",
    "notion",
]
