"""Text diffs between master and partner values, rendered for the terminal."""

from __future__ import annotations

from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Literal, TypeAlias

from rich.text import Text

from .models import StructuralDifference

SegmentTag: TypeAlias = Literal["same", "added", "removed"]

LINE_SEPARATOR = "\n"
WORD_SEPARATOR = " "

SAME_STYLE = "default"
REMOVED_STYLE = "red"
ADDED_STYLE = "bright_green"
WORD_SAME_STYLE = "green"
WORD_ADDED_STYLE = "white on green"


@dataclass(frozen=True, slots=True)
class Segment:
    """A run of tokens sharing one diff tag, joined by the separator."""

    tag: SegmentTag
    text: str


def diff_segments(old: str, new: str, separator: str = LINE_SEPARATOR) -> list[Segment]:
    """Diff two strings token by token and merge adjacent tokens with the same tag."""

    old_tokens = old.split(separator)
    new_tokens = new.split(separator)
    matcher = SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)

    tagged: list[tuple[SegmentTag, str]] = []
    for opcode, i1, i2, j1, j2 in matcher.get_opcodes():
        if opcode == "equal":
            tagged.extend(("same", token) for token in old_tokens[i1:i2])
            continue
        if opcode in ("delete", "replace"):
            tagged.extend(("removed", token) for token in old_tokens[i1:i2])
        if opcode in ("insert", "replace"):
            tagged.extend(("added", token) for token in new_tokens[j1:j2])

    segments: list[Segment] = []
    run_tag: SegmentTag | None = None
    run: list[str] = []
    for tag, token in tagged:
        if tag != run_tag and run_tag is not None:
            segments.append(Segment(run_tag, separator.join(run)))
            run = []
        run_tag = tag
        run.append(token)
    if run_tag is not None:
        segments.append(Segment(run_tag, separator.join(run)))
    return segments


def _word_diff_line(removed: str, added: str) -> Text:
    line = Text("+", style=WORD_SAME_STYLE)
    for segment in diff_segments(removed, added, WORD_SEPARATOR):
        if segment.tag == "same":
            line.append(segment.text, style=WORD_SAME_STYLE)
            line.append(" ", style=WORD_SAME_STYLE)
        elif segment.tag == "added":
            line.append(segment.text, style=WORD_ADDED_STYLE)
            line.append(" ")
    return line


def render_diff(master_value: str, partner_value: str) -> Text:
    """Render a line diff from the master value to the partner value.

    Unchanged lines are prefixed with a space, removals with `-` and additions
    with `+`. An addition directly following a removal is shown as a single
    word-level diff line so the changed words stand out.
    """

    lines: list[Text] = []
    segments = diff_segments(master_value, partner_value, LINE_SEPARATOR)
    for index, segment in enumerate(segments):
        if segment.tag == "same":
            lines.extend(Text(f" {line}", style=SAME_STYLE) for line in segment.text.split(LINE_SEPARATOR))
        elif segment.tag == "removed":
            lines.extend(Text(f"-{line}", style=REMOVED_STYLE) for line in segment.text.split(LINE_SEPARATOR))
        elif index > 0 and segments[index - 1].tag == "removed":
            lines.append(_word_diff_line(segments[index - 1].text, segment.text))
        else:
            lines.extend(Text(f"+{line}", style=ADDED_STYLE) for line in segment.text.split(LINE_SEPARATOR))
    return Text("\n").join(lines)


def render_structural_difference(difference: StructuralDifference) -> Text:
    """Render the header columns missing on either side as a diff."""

    return render_diff(
        f"master: {', '.join(difference.master_only)}",
        f"partner: {', '.join(difference.partner_only)}",
    )
