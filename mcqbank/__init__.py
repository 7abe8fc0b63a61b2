"""MCQ question bank: storage, content loading and partition seeding."""

__version__ = "0.1.0"
