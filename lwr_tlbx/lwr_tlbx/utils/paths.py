import os
from pathlib import Path


__all__ = ["OUTPUT_DIR_ENV", "get_cache_dir", "get_output_dir"]


OUTPUT_DIR_ENV = "LWR_TLBX_OUTPUT_DIR"


def get_cache_dir() -> Path:
    """Get the directory holding downloaded input spreadsheets.

    Returns:
        Path to ``_data`` below the current working directory (created if missing)
    """
    data_dir = (Path.cwd() / "_data").resolve()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_output_dir(output_dir: str | Path | None = None) -> Path:
    """Get the directory receiving exported workbooks and figures.

    Args:
        output_dir: Explicit directory; wins over the ``LWR_TLBX_OUTPUT_DIR`` environment variable

    Returns:
        Resolved output directory (created if missing), ``./output`` by default
    """
    chosen = output_dir or os.environ.get(OUTPUT_DIR_ENV) or Path.cwd() / "output"
    out = Path(chosen).expanduser().resolve()
    out.mkdir(parents=True, exist_ok=True)
    return out
