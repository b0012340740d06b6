from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from .model import Timeline, TimedLine

logger = logging.getLogger(__name__)

# [mm:ss] / [mm:ss.x...] with optional whitespace inside the brackets
_TS_RE = re.compile(r"\[\s*(\d+)\s*:\s*(\d+)(?:\.(\d+))?\s*\]", re.ASCII)
_OFFSET_RE = re.compile(r"\[\s*offset\s*:\s*([+-]?\d+)\s*\]", re.IGNORECASE | re.ASCII)
_TAG_RE = re.compile(r"^\[([a-zA-Z]{1,8}):(.*)\]\s*$")

_RECORD_STRIP = " \t\r"
_PAYLOAD_STRIP = " \t"

HEADER_TIMESTAMP_MS = -1
HEADER_MARGIN_MS = 1000


class LrcParseError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class ParseStats:
    records_total: int
    records_blank: int
    records_timed: int
    records_ignored: int
    offset_records: int
    tags_skipped: int
    lines_total: int


def _parse_ts_to_ms(minutes: str, seconds: str, frac: str | None) -> int:
    try:
        m = int(minutes)
        s = int(seconds)
        # "5" -> 500ms, "25" -> 250ms, "1234" -> 123ms (truncated)
        ms = int(frac[:3].ljust(3, "0")) if frac else 0
    except ValueError as e:
        raise LrcParseError(f"Invalid timestamp [{minutes}:{seconds}]") from e
    return (m * 60 + s) * 1000 + ms


def parse_timeline(title: str, artist: str | None, body: str | None) -> Timeline:
    timeline, _stats = parse_timeline_with_stats(title, artist, body)
    return timeline


def parse_timeline_with_stats(
    title: str, artist: str | None, body: str | None
) -> tuple[Timeline, ParseStats]:
    """
    Supported:
    - [mm:ss], [mm:ss.x], [mm:ss.xx], [mm:ss.xxx], whitespace allowed inside tags
    - multiple timestamps per line, all sharing the text after the last tag
    - [offset:+/-ms], last one wins, positive values show lines earlier

    Records without any timestamp are dropped. The result always starts with
    a header line carrying the title, placed before every lyric line.
    """
    offset_ms = 0
    extracted: list[TimedLine] = []

    total = 0
    blank = 0
    timed = 0
    ignored = 0
    offsets = 0
    skipped = 0

    for raw in (body or "").split("\n"):
        total += 1
        line = raw.strip(_RECORD_STRIP)
        if not line:
            blank += 1
            continue

        off = _OFFSET_RE.search(line)
        if off:
            offsets += 1
            offset_ms = int(off.group(1))
            continue

        ts = list(_TS_RE.finditer(line))
        if not ts:
            ignored += 1
            continue

        timed += 1
        payload = line[ts[-1].end() :].lstrip(_PAYLOAD_STRIP)

        for m in ts:
            try:
                t_ms = _parse_ts_to_ms(m.group(1), m.group(2), m.group(3))
            except LrcParseError as e:
                skipped += 1
                logger.debug("Skipping tag %r: %s", m.group(0), e)
                continue
            extracted.append(TimedLine(timestamp_ms=t_ms, text=payload))

    shifted = [TimedLine(timestamp_ms=e.timestamp_ms - offset_ms, text=e.text) for e in extracted]
    # list.sort is stable: equal timestamps keep extraction order
    shifted.sort(key=lambda e: e.timestamp_ms)

    header = TimedLine(timestamp_ms=HEADER_TIMESTAMP_MS, text=title)
    if shifted and shifted[0].timestamp_ms <= header.timestamp_ms:
        header = TimedLine(timestamp_ms=shifted[0].timestamp_ms - HEADER_MARGIN_MS, text=title)

    timeline = Timeline(
        lines=(header, *shifted),
        title=title,
        artist=artist,
        offset_ms=offset_ms,
    )
    stats = ParseStats(
        records_total=total,
        records_blank=blank,
        records_timed=timed,
        records_ignored=ignored,
        offset_records=offsets,
        tags_skipped=skipped,
        lines_total=len(timeline.lines),
    )
    logger.debug(
        "Parsed %d records into %d lines (offset=%dms, skipped tags=%d)",
        total,
        len(shifted),
        offset_ms,
        skipped,
    )
    return timeline, stats


def read_id_tags(body: str | None) -> dict[str, str]:
    """
    Collect LRC ID tags such as [ti:...] and [ar:...], keys lower-cased.
    The offset tag is left to the parser.
    """
    tags: dict[str, str] = {}
    for raw in (body or "").split("\n"):
        line = raw.strip(_RECORD_STRIP)
        tag = _TAG_RE.match(line)
        if not tag or _TS_RE.search(line):
            continue
        k = tag.group(1).strip().lower()
        v = tag.group(2).strip()
        if k and v and k != "offset":
            tags[k] = v
    return tags
