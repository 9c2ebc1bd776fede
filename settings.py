import os
from dataclasses import dataclass

from dotenv import load_dotenv

from querylog.detect import LineShape, parse_shape
from querylog.parsers import DEFAULT_MARKER


@dataclass(frozen=True)
class Settings:
    marker: str = DEFAULT_MARKER
    shape: LineShape = LineShape.TIMESTAMPED
    output_dir: str = "."

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Read QUERYCMP_* variables, after loading a .env file if one exists.

        Raises ValueError for an unknown QUERYCMP_SHAPE.
        """
        load_dotenv()

        return cls(
            marker=os.getenv("QUERYCMP_MARKER") or DEFAULT_MARKER,
            shape=parse_shape(os.getenv("QUERYCMP_SHAPE") or LineShape.TIMESTAMPED.value),
            output_dir=os.getenv("QUERYCMP_OUTPUT_DIR") or os.getcwd(),
        )
