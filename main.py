"""
Convenience entrypoint.

Prefer running:
  - `lyrics-sync play song.lrc`
or:
  - `python -m lyrics_sync`
"""

from lyrics_sync.cli import main as cli_main


def cli() -> None:
    cli_main()


if __name__ == "__main__":
    cli()
