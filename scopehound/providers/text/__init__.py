from .file_text_provider import FileTextProvider

__all__ = ["FileTextProvider"]
