"""Command-line interface for Beat Detector.

Detects beats and measures BPM in an audio file, optionally exporting a
beat map as CSV.
"""

import json
import sys
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.console import Console
from rich.table import Table

from .analysis import BeatDetector, select_method
from .core import (
    Analysis,
    BeatDetectorError,
    DetectionParams,
    parse_bpm_range,
    parse_float,
    parse_method,
)
from .input import FileSource
from .logging_utils import setup_logging
from .output import BeatMapExporter

app = typer.Typer(
    name="beat-detector",
    help="Detect beats and measure BPM in audio files",
    rich_markup_mode="markdown",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)

SHOW_BEATS = 20
EXPORT_FLAGS = ("-e", "--export")


@app.command()
def detect(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, FLAC, MP3, ...)"),
    method: str = typer.Option(
        "auto", "-m", "--method", help="Detection method: energy, spectral, onset, auto"
    ),
    sensitivity: str = typer.Option(
        "0.5", "-s", "--sensitivity", help="Detection sensitivity (0-1)"
    ),
    bpm_range: str = typer.Option(
        "60-200", "-b", "--bpm-range", help="BPM range to detect (min-max)"
    ),
    min_interval: str = typer.Option(
        "0.3", "-i", "--min-interval", help="Minimum beat interval in seconds"
    ),
    export: Optional[str] = typer.Option(
        None,
        "-e",
        "--export",
        help="Export beat timestamps to CSV file (default: <input>_beats.csv)",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Print detailed analysis"),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Detect beats and BPM in an audio file.

    **Detection methods:**

    - energy: energy-based detection (fast, good for percussive music)
    - spectral: spectral flux detection (better for complex music)
    - onset: onset detection (best quality, requires high sample rate)
    - auto: onset at 44.1 kHz and above, energy otherwise

    **Examples:**

        beat-detector music.mp3

        beat-detector song.wav -m onset -s 0.7 -e beats.csv

        beat-detector audio.flac -b 120-180 -v

        beat-detector track.wav -m energy -i 0.4 -e
    """
    # Keep stdout clean for JSON
    out = err_console if json_output else console
    setup_logging(console=out)

    try:
        params = _build_params(method, sensitivity, bpm_range, min_interval)

        with FileSource(input_file) as source:
            if not json_output:
                _print_header(input_file, source, params)
            analysis = BeatDetector(params).analyze(source)

        if json_output:
            typer.echo(json.dumps(analysis.to_dict(), indent=2))
        else:
            _print_analysis(analysis, verbose)

        if export is not None:
            path = Path(export) if export else BeatMapExporter.default_path(input_file)
            written = BeatMapExporter().export(analysis, path)
            out.print(
                f"Beat map exported to: {written}",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )

    except BeatDetectorError as e:
        _print_error(f"Error: {e}")
        raise typer.Exit(1)


def _build_params(
    method: str, sensitivity: str, bpm_range: str, min_interval: str
) -> DetectionParams:
    """Parse raw option strings into DetectionParams."""
    min_bpm, max_bpm = parse_bpm_range(bpm_range)
    # Out-of-range sensitivity is clamped rather than rejected
    level = min(max(parse_float("sensitivity", sensitivity), 0.0), 1.0)
    return DetectionParams(
        method=parse_method(method),
        sensitivity=level,
        min_bpm=min_bpm,
        max_bpm=max_bpm,
        min_beat_interval=parse_float("minimum interval", min_interval),
    )


def _print_header(input_file: Path, source: FileSource, params: DetectionParams) -> None:
    console.print("[bold]Audio Beat Detector[/bold]")
    console.print("==================\n")
    console.print(f"Input file: {input_file}", markup=False, highlight=False, soft_wrap=True)
    console.print(f"Sample rate: {source.sample_rate} Hz")
    console.print(f"Channels: {source.channels}")
    if source.duration > 0:
        console.print(f"Duration: {source.duration:.2f} seconds")
    console.print(f"BPM range: {params.min_bpm:.0f} - {params.max_bpm:.0f}")
    console.print(f"Sensitivity: {params.sensitivity * 100:.0f}%")

    chosen = select_method(params.method, source.sample_rate)
    console.print(f"Detection method: [cyan]{chosen.display_name}[/cyan]\n")


def _print_analysis(analysis: Analysis, verbose: bool) -> None:
    console.print("\n[bold]Analysis Results[/bold]")
    console.print("================\n")
    console.print(f"Detected BPM: [green]{analysis.bpm:.1f}[/green]")
    console.print(f"Confidence: {analysis.confidence * 100:.0f}%")
    console.print(f"Total beats detected: {len(analysis.beats)}")
    console.print(f"Average beat interval: {analysis.avg_beat_interval:.3f} seconds")
    console.print(f"Tempo stability: {analysis.tempo_stability * 100:.0f}%\n")

    if verbose and analysis.beats:
        _show_beats_table(analysis)


def _show_beats_table(analysis: Analysis) -> None:
    """Display the first beats in a table."""
    table = Table(title=f"Beat timestamps (first {SHOW_BEATS})")
    table.add_column("#", style="dim")
    table.add_column("Time (s)", style="cyan")
    table.add_column("Strength", style="yellow")
    table.add_column("Confidence", style="magenta")

    for i, beat in enumerate(analysis.beats[:SHOW_BEATS], start=1):
        table.add_row(
            str(i),
            f"{beat.timestamp:.3f}",
            f"{beat.strength:.2f}",
            f"{beat.confidence * 100:.0f}%",
        )

    console.print(table)
    remaining = len(analysis.beats) - SHOW_BEATS
    if remaining > 0:
        console.print(f"  ... and {remaining} more beats")


def _print_error(message: str) -> None:
    err_console.print(message, style="red", markup=False, highlight=False, soft_wrap=True)


def _expand_export_flag(argv: List[str]) -> List[str]:
    """Give a bare -e/--export an empty value, meaning 'use the default path'.

    The flag takes a file name only when the next argument is not an option.
    """
    args = []
    for i, arg in enumerate(argv):
        args.append(arg)
        if arg in EXPORT_FLAGS:
            following = argv[i + 1] if i + 1 < len(argv) else None
            if following is None or following.startswith("-"):
                args.append("")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit code (0 ok, 1 any error)."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        code = app(
            args=_expand_export_flag(list(argv)),
            prog_name="beat-detector",
            standalone_mode=False,
        )
    except click.ClickException as e:
        _print_error(f"Error: {e.format_message()}")
        return 1
    except click.exceptions.Abort:
        return 1

    return code if isinstance(code, int) else 0


def run():
    """Entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
