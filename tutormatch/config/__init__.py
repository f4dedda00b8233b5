from tutormatch.config.settings import settings

__all__ = ["settings"]
