"""WebCore: a compiler from ``.webc`` sources to static HTML, CSS and a reactive JS runtime."""

__version__ = "0.1.0"

__all__ = ["__version__"]
