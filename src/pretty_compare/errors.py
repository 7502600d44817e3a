"""Exceptions raised by pretty-compare."""

from __future__ import annotations


class SinkWriteError(OSError):
    """Writing rendered output to the destination sink failed.

    Raised from the original ``OSError``; no prefix of the output is
    guaranteed to have reached the sink.
    """
