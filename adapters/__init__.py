from .yahoo import YahooCandleSource

__all__ = [
    "YahooCandleSource",
]
