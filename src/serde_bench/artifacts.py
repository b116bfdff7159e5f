"""Write each codec's encoding of the dataset to disk."""

import logging
from pathlib import Path

from serde_bench.codecs import Codec
from serde_bench.records import Dataset

logger = logging.getLogger(__name__)


def artifact_name(codec: Codec) -> str:
    return f"data.{codec.name}"


def write_artifacts(codecs: list[Codec], dataset: Dataset, output_dir: Path | str = ".") -> dict[str, Path]:
    """
    Encode the dataset with each codec and write one file per codec.

    Runs after benchmarking, never inside a timed region.

    Returns:
        Mapping of codec name to the written path
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = {}
    for codec in codecs:
        path = output_dir / artifact_name(codec)
        path.write_bytes(codec.encode(dataset))
        logger.info("Wrote %s", path)
        paths[codec.name] = path
    return paths


def artifact_sizes(paths: dict[str, Path]) -> dict[str, int]:
    """Sizes of written artifacts as reported by the filesystem."""
    return {name: path.stat().st_size for name, path in paths.items()}
