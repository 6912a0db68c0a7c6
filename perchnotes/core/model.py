"""
Styled text model shared by the markdown converter, the list engine and the
formatting commands.

A StyledDocument is an immutable, ordered sequence of StyledRun objects.
Concatenating the run texts reproduces the plain-text projection exactly;
adjacent runs never share a style and no run is empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace as dc_replace
from typing import Callable, Iterable, Iterator

from perchnotes.settings import DEFAULT_BASE_FONT_SIZE


@dataclass(frozen=True)
class RunStyle:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    heading_level: int = 0
    is_horizontal_rule_marker: bool = False
    # None -> document base size
    font_size: float | None = None
    monospace: bool = False
    link: str | None = None

    def __post_init__(self) -> None:
        if self.heading_level not in (0, 1, 2, 3):
            raise ValueError(f"RunStyle(): invalid heading level {self.heading_level!r}")
        if self.font_size is not None and self.font_size <= 0:
            raise ValueError(f"RunStyle(): font size must be positive, got {self.font_size!r}")

    @classmethod
    def plain(cls) -> RunStyle:
        return cls()

    @property
    def is_plain(self) -> bool:
        return self == PLAIN

    def with_changes(self, **changes) -> RunStyle:
        return dc_replace(self, **changes)


PLAIN = RunStyle()


@dataclass(frozen=True)
class StyledRun:
    text: str
    style: RunStyle = PLAIN

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise ValueError(f"StyledRun(): text must be str, got {type(self.text).__name__}")
        if not self.text:
            raise ValueError("StyledRun(): zero-length runs are not allowed")

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class TextRange:
    """Cursor or selection in plain-text offsets, end exclusive."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.end < self.start:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @classmethod
    def caret(cls, position: int) -> TextRange:
        return cls(position, position)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def clamped(self, text_length: int) -> TextRange:
        start = min(max(self.start, 0), text_length)
        end = min(max(self.end, 0), text_length)
        if (start, end) == (self.start, self.end):
            return self
        return TextRange(start, end)


@dataclass(frozen=True)
class EditResult:
    """
    Outcome of a key handler or formatting command.

    handled=False means the host applies its default behaviour and nothing was
    changed. A handled command on a collapsed selection may only produce a new
    typing style, leaving `document` as None.
    """

    handled: bool
    document: StyledDocument | None = None
    cursor: TextRange | None = None
    typing_style: RunStyle | None = None


NOT_HANDLED = EditResult(False)


class DocumentBuilder:
    """Accumulates (text, style) pieces; empty pieces are skipped."""

    def __init__(self) -> None:
        self._runs: list[StyledRun] = []

    def append(self, text: str, style: RunStyle = PLAIN) -> DocumentBuilder:
        if text:
            self._runs.append(StyledRun(text, style))
        return self

    def build(self, base_font_size: float = DEFAULT_BASE_FONT_SIZE) -> StyledDocument:
        return StyledDocument(self._runs, base_font_size=base_font_size)


@dataclass(frozen=True)
class StyledDocument:
    runs: tuple[StyledRun, ...] = ()
    base_font_size: float = DEFAULT_BASE_FONT_SIZE
    text: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.base_font_size <= 0:
            raise ValueError(f"StyledDocument(): base font size must be positive, got {self.base_font_size!r}")
        runs = _merge_runs(self.runs)
        object.__setattr__(self, "runs", runs)
        object.__setattr__(self, "text", "".join(run.text for run in runs))

    @classmethod
    def from_text(
        cls,
        text: str,
        style: RunStyle | None = None,
        *,
        base_font_size: float = DEFAULT_BASE_FONT_SIZE,
    ) -> StyledDocument:
        return DocumentBuilder().append(text, style or PLAIN).build(base_font_size)

    def __len__(self) -> int:
        return len(self.text)

    def __iter__(self) -> Iterator[StyledRun]:
        return iter(self.runs)

    def spans(self) -> Iterator[tuple[int, int, StyledRun]]:
        """Yield (start, end, run) for every run."""
        pos = 0
        for run in self.runs:
            yield pos, pos + len(run.text), run
            pos += len(run.text)

    def style_at(self, position: int) -> RunStyle:
        """
        Style of the character before `position` (what a host would use as
        typing attributes). Position 0 takes the first character's style.
        """
        if not self.runs:
            return PLAIN
        position = min(max(position, 1), len(self.text))
        for start, end, run in self.spans():
            if start < position <= end:
                return run.style
        return self.runs[-1].style

    def slice(self, start: int, end: int) -> StyledDocument:
        start, end = self._clamp(start, end)
        _, rest = _split_runs(self.runs, start)
        middle, _ = _split_runs(rest, end - start)
        return StyledDocument(middle, base_font_size=self.base_font_size)

    def replace(
        self,
        start: int,
        end: int,
        replacement: str | StyledDocument,
        style: RunStyle | None = None,
    ) -> StyledDocument:
        """
        Return a new document with [start, end) replaced.

        A string replacement takes `style` (plain by default); a document
        replacement keeps its own runs.
        """
        start, end = self._clamp(start, end)
        if isinstance(replacement, StyledDocument):
            inserted = replacement.runs
        elif replacement:
            inserted = (StyledRun(replacement, style or PLAIN),)
        else:
            inserted = ()

        before, rest = _split_runs(self.runs, start)
        _, after = _split_runs(rest, end - start)
        return StyledDocument(before + inserted + after, base_font_size=self.base_font_size)

    def restyle(self, start: int, end: int, fn: Callable[[RunStyle], RunStyle]) -> StyledDocument:
        """Return a new document with `fn` applied to every style inside [start, end)."""
        start, end = self._clamp(start, end)
        if start == end:
            return self
        before, rest = _split_runs(self.runs, start)
        middle, after = _split_runs(rest, end - start)
        changed = tuple(StyledRun(run.text, fn(run.style)) for run in middle)
        return StyledDocument(before + changed + after, base_font_size=self.base_font_size)

    def _clamp(self, start: int, end: int) -> tuple[int, int]:
        rng = TextRange(start, end).clamped(len(self.text))
        return rng.start, rng.end


# ───────────────────────── helpers ─────────────────────────


def _merge_runs(runs: Iterable[StyledRun]) -> tuple[StyledRun, ...]:
    merged: list[StyledRun] = []
    for run in runs:
        if not isinstance(run, StyledRun):
            raise ValueError(f"StyledDocument(): expected StyledRun, got {type(run).__name__}")
        if merged and merged[-1].style == run.style:
            merged[-1] = StyledRun(merged[-1].text + run.text, run.style)
        else:
            merged.append(run)
    return tuple(merged)


def _split_runs(
    runs: tuple[StyledRun, ...],
    offset: int,
) -> tuple[tuple[StyledRun, ...], tuple[StyledRun, ...]]:
    """Split a run sequence at a character offset, cutting a run in two if needed."""
    before: list[StyledRun] = []
    pos = 0
    for i, run in enumerate(runs):
        run_end = pos + len(run.text)
        if offset <= pos:
            return tuple(before), runs[i:]
        if offset < run_end:
            cut = offset - pos
            head = StyledRun(run.text[:cut], run.style)
            tail = StyledRun(run.text[cut:], run.style)
            return tuple(before) + (head,), (tail,) + runs[i + 1:]
        before.append(run)
        pos = run_end
    return tuple(before), ()
