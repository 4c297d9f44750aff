"""Raw line reading on top of the terminal adapter."""

from parley.reader.line_reader import LineReader, ReaderConfig

__all__ = ["LineReader", "ReaderConfig"]
