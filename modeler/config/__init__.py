from modeler.config.settings import settings

__all__ = ["settings"]
