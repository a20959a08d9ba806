"""chats2md — Convert chat export JSON archives into Markdown notes."""

__version__ = "0.1.0"
