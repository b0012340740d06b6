from __future__ import annotations

from pathlib import Path
import typer

from lyrics_sync.app import play as play_loop
from lyrics_sync.config import AppConfig, load_config, save_config_value, config_file
from lyrics_sync.i18n import set_lang, t
from lyrics_sync.logging_setup import setup_logging
from lyrics_sync.lrc.export import export_json, export_lrc, export_srt
from lyrics_sync.lrc.parse import parse_timeline_with_stats, read_id_tags
from lyrics_sync.render.ansi import AnsiRenderer
from lyrics_sync.render.base import LineRole, LyricsRenderer, style_window
from lyrics_sync.render.plain import PlainRenderer
from lyrics_sync.sync.clock import WallClock
from lyrics_sync.sync.session import LyricsSession
from lyrics_sync.sync.window import select_window


app = typer.Typer(no_args_is_help=True, add_completion=False)

# keep the last frame on screen for a moment after the final line
_END_LINGER_MS = 3000


def _load_cfg() -> AppConfig:
    cfg = load_config()
    set_lang(cfg.lang)
    return cfg


def _read_lyrics(lrc_path: Path) -> str:
    try:
        return lrc_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(t("file_unreadable", path=str(lrc_path), error=str(e)), err=True)
        raise typer.Exit(code=1)


def _track_names(lrc_path: Path, body: str, title: str | None, artist: str | None) -> tuple[str, str | None]:
    # explicit options → [ti:]/[ar:] tags → file name
    tags = read_id_tags(body)
    return (title or tags.get("ti") or lrc_path.stem), (artist or tags.get("ar"))


def _load_session(lrc_path: Path, title: str | None, artist: str | None) -> LyricsSession:
    body = _read_lyrics(lrc_path)
    session = LyricsSession()
    session.load(*_track_names(lrc_path, body, title, artist), body)
    return session


@app.command()
def parse(
    lrc_path: Path,
    title: str | None = typer.Option(None, "--title", help="Track title (header line)"),
    artist: str | None = typer.Option(None, "--artist", help="Track artist"),
):
    """Parse LRC and print stats."""
    _load_cfg()
    body = _read_lyrics(lrc_path)
    name, who = _track_names(lrc_path, body, title, artist)
    timeline, stats = parse_timeline_with_stats(name, who, body)
    typer.echo(f"records_total={stats.records_total}")
    typer.echo(f"records_blank={stats.records_blank}")
    typer.echo(f"records_timed={stats.records_timed}")
    typer.echo(f"records_ignored={stats.records_ignored}")
    typer.echo(f"offset_records={stats.offset_records}")
    typer.echo(f"tags_skipped={stats.tags_skipped}")
    typer.echo(f"lines_total={stats.lines_total}")
    typer.echo(f"offset_ms={timeline.offset_ms}")
    typer.echo(f"header_ms={timeline.lines[0].timestamp_ms}")


@app.command()
def window(
    lrc_path: Path,
    at: int = typer.Option(..., "--at", help="Playback position in milliseconds"),
    title: str | None = typer.Option(None, "--title", help="Track title (header line)"),
    artist: str | None = typer.Option(None, "--artist", help="Track artist"),
):
    """Print the lines shown at a playback position."""
    _load_cfg()
    session = _load_session(lrc_path, title, artist)
    lines = select_window(session.timeline, at)
    if not lines:
        typer.echo(t("window_empty", at=at))
        return

    marks = {LineRole.HEADER: "#", LineRole.CURRENT: ">", LineRole.CONTEXT: " "}
    for line, (role, text) in zip(lines, style_window(session.timeline, lines)):
        typer.echo(f"{marks[role]} {line.timestamp_ms:>8} {text}")


@app.command()
def play(
    lrc_path: Path,
    title: str | None = typer.Option(None, "--title", help="Track title (header line)"),
    artist: str | None = typer.Option(None, "--artist", help="Track artist"),
    start_ms: int = typer.Option(0, "--start-ms", help="Start position in milliseconds"),
    rate: float = typer.Option(1.0, "--rate", help="Playback speed multiplier"),
    refresh_hz: float | None = typer.Option(None, "--refresh-hz", help="Ticks per second"),
    plain: bool = typer.Option(False, "--plain", help="Plain text frames instead of ANSI screen"),
    no_alt_screen: bool = typer.Option(False, "--no-alt-screen", help="Do not use alternate screen buffer"),
    sync: bool | None = typer.Option(None, "--sync/--no-sync", help="Synchronize lyrics (default: config)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Play lyrics against a simulated player clock.
    """
    cfg = _load_cfg()
    if refresh_hz is not None:
        cfg = cfg.__class__(**{**cfg.__dict__, "refresh_hz": refresh_hz})
    if no_alt_screen:
        cfg = cfg.__class__(**{**cfg.__dict__, "use_alt_screen": False})
    if sync is not None:
        cfg = cfg.__class__(**{**cfg.__dict__, "sync_lyrics": sync})
    if plain:
        cfg = cfg.__class__(**{**cfg.__dict__, "renderer": "plain"})
    if rate <= 0:
        raise typer.BadParameter("rate must be positive", param_hint="--rate")

    setup_logging(debug)
    session = _load_session(lrc_path, title, artist)

    duration_ms: int | None = None
    if session.has_timed_lines:
        duration_ms = session.timeline.timestamps[-1] + _END_LINGER_MS

    renderer: LyricsRenderer
    if cfg.renderer == "plain":
        renderer = PlainRenderer()
    else:
        renderer = AnsiRenderer(use_alt_screen=cfg.use_alt_screen)

    clock = WallClock(start_ms=start_ms, rate=rate, duration_ms=duration_ms)
    try:
        code = play_loop(cfg, session, clock, renderer)
    except KeyboardInterrupt:
        code = 130
    raise typer.Exit(code=code)


@app.command()
def export(
    lrc_path: Path,
    fmt: str = typer.Option("lrc", "--format", case_sensitive=False, help="lrc|srt|json"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    title: str | None = typer.Option(None, "--title", help="Track title"),
    artist: str | None = typer.Option(None, "--artist", help="Track artist"),
):
    """Export LRC to SRT/JSON/LRC (normalized, offset applied)."""
    _load_cfg()
    session = _load_session(lrc_path, title, artist)
    fmt_l = fmt.lower()
    if fmt_l == "json":
        data = export_json(session.timeline)
    elif fmt_l == "lrc":
        data = export_lrc(session.timeline)
    elif fmt_l == "srt":
        data = export_srt(session.timeline)
    else:
        raise typer.BadParameter("format must be one of: lrc, srt, json")

    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command()
def config(
    lang: str | None = typer.Option(None, "--lang", help="Interface language: EN or RU"),
    sync: bool | None = typer.Option(None, "--sync/--no-sync", help="Synchronize lyrics by default"),
):
    """Show or change saved preferences."""
    _load_cfg()
    if lang is not None:
        try:
            save_config_value("lang", lang)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--lang")
        set_lang(lang)
        typer.echo(t("config_saved", name="lang", value=lang.upper(), path=str(config_file())))
    if sync is not None:
        save_config_value("sync_lyrics", sync)
        typer.echo(t("config_saved", name="sync_lyrics", value=str(sync).lower(), path=str(config_file())))

    cfg = load_config()
    typer.echo(t("config_current", lang=cfg.lang, sync=str(cfg.sync_lyrics).lower()))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
