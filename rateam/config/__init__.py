from rateam.config.settings import settings

__all__ = ["settings"]
