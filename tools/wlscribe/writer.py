"""
CodeWriter: append-only line buffer the emitters render into.
"""

from typing import List


class CodeWriter:
    """Collects generated lines; ``text()`` joins them with a final newline."""

    def __init__(self):
        self._lines: List[str] = []

    def line(self, text: str = ""):
        self._lines.append(text)

    def lines(self, *texts: str):
        self._lines.extend(texts)

    def block(self, header: str, body: List[str], indent: str = "    "):
        """Emit ``header {`` + indented body + ``}``."""
        self._lines.append(f"{header} {{")
        self._lines.extend(f"{indent}{b}" if b else "" for b in body)
        self._lines.append("}")

    def text(self) -> str:
        return "\n".join(self._lines) + "\n"
