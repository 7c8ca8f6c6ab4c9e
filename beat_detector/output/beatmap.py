"""Beat map (CSV) export."""

from pathlib import Path
from typing import List, Union

from ..core import Analysis, UpstreamError


class BeatMapExporter:
    """Export detected beats as a commented CSV beat map."""

    def render(self, analysis: Analysis) -> str:
        """Render the beat map as text without saving."""
        lines: List[str] = [
            "# Beat Map",
            f"# BPM: {analysis.bpm:.1f}",
            f"# Confidence: {analysis.confidence * 100:.0f}%",
            f"# Total beats: {len(analysis.beats)}",
            "#",
            "# Format: timestamp(s), strength, confidence",
            "#",
            "",
        ]
        for beat in analysis.beats:
            lines.append(f"{beat.timestamp:.6f},{beat.strength:.4f},{beat.confidence:.4f}")

        return "\n".join(lines) + "\n"

    def export(self, analysis: Analysis, output_path: Union[str, Path]) -> Path:
        """
        Export a beat map to file.

        Args:
            analysis: Detection result
            output_path: Path to output CSV file

        Returns:
            The path written

        Raises:
            UpstreamError: If the file cannot be written
        """
        output_path = Path(output_path)

        try:
            # Ensure output directory exists
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(self.render(analysis))
        except OSError as e:
            raise UpstreamError(f"Failed to open output file: {output_path}") from e

        return output_path

    @staticmethod
    def default_path(input_file: Union[str, Path]) -> Path:
        """Default beat map name for an input file (e.g., 'song_beats.csv')."""
        return Path(f"{Path(input_file).stem}_beats.csv")
