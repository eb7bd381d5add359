"""improved-markdown — virtual path algebra and embedded document secrets."""

__version__ = "0.3.0"
