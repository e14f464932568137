from .content import content_cli

__all__ = ["content_cli"]
