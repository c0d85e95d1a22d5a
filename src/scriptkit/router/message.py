"""Log message sources: joined call arguments or an input stream."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import IO

from scriptkit.core.constants import STREAM_CHUNK_SIZE


def default_stdin() -> IO:
    """Binary standard input, or the text stream when no buffer is attached."""
    return getattr(sys.stdin, "buffer", sys.stdin)


@dataclass(frozen=True)
class LogMessage:
    """A message built from arguments, or the full contents of a stream.

    Exactly one of `text` and `stream` is set. The source is chosen once per
    call and the two are never mixed.
    """

    text: str | None = None
    stream: IO | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.stream is None):
            raise ValueError("LogMessage needs exactly one of text or stream")

    @classmethod
    def from_words(cls, words: Iterable[object], stdin: IO | None = None) -> LogMessage:
        """Join `words` with single spaces; with no words, read `stdin` instead."""
        words = [str(word) for word in words]
        if words:
            return cls(text=" ".join(words))
        return cls(stream=stdin if stdin is not None else default_stdin())

    @property
    def from_stream(self) -> bool:
        return self.stream is not None

    def iter_chunks(self, chunk_size: int = STREAM_CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the message as bytes.

        Argument text gets one trailing newline. Stream input is yielded
        unmodified as it is read.
        """
        if self.text is not None:
            yield (self.text + "\n").encode("utf-8")
            return

        while True:
            chunk = self.stream.read(chunk_size)
            if not chunk:
                return
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            yield chunk

    def iter_lines(self) -> Iterator[str]:
        """Yield syslog records: the argument text, or each non-empty input line."""
        if self.text is not None:
            yield self.text
            return

        for raw in self.stream:
            line = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
            line = line.rstrip("\r\n")
            if line:
                yield line
