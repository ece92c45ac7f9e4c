"""Data manager for loading and caching the injury data files.

The injury dashboard works on three flat files: the injuries
themselves (gzip-compressed TSV), the product code lookup and the
population table.  This module reads them from a local data directory
and, when a file is missing there, downloads it from the remote source
and writes a local copy so later starts skip the network.  Failures to
write the copy are logged instead of aborting the load.
"""

import os
import tempfile
import logging
from pathlib import Path
from typing import Dict, Optional
from functools import lru_cache

import pandas as pd

from .config import NEISS_COLUMNS, NEISS_FILES, NEISS_SEP, NEISS_SOURCE
from .pipeline import ensure_columns

logger = logging.getLogger(__name__)


def _resolve_data_dir() -> Path:
    """Select a writable directory for the injury data.

    The lookup order is:

    1. The ``NEISS_DATA_DIR`` environment variable, if set.
    2. A ``data`` folder at the repository root.
    3. A temporary directory in ``/tmp``.

    Each candidate path is tested for writability by attempting to
    create and delete a sentinel file.  The first path that succeeds
    is returned.
    """
    candidates: list[Path] = []
    env = os.getenv("NEISS_DATA_DIR")
    if env:
        candidates.append(Path(env).expanduser().resolve())

    # Repo root /data (two levels up from this file)
    candidates.append(Path(__file__).resolve().parent.parent / "data")
    candidates.append(Path(tempfile.gettempdir()) / "neiss_data")

    for path in candidates:
        try:
            path.mkdir(parents=True, exist_ok=True)
            test_file = path / ".write_test"
            test_file.write_text("ok", encoding="utf-8")
            test_file.unlink()
            return path
        except OSError:
            continue

    fallback = Path(tempfile.gettempdir()) / "neiss_data"
    fallback.mkdir(parents=True, exist_ok=True)
    return fallback


def resolve_data_dir() -> Path:
    """Public wrapper so callers can see where the files will live."""
    return _resolve_data_dir()


def _source_base() -> str:
    return os.getenv("NEISS_SOURCE", NEISS_SOURCE).rstrip("/")


def _compression_for(filename: str) -> Optional[str]:
    return "gzip" if filename.endswith(".gz") else None


def _atomic_to_tsv(df: pd.DataFrame, path: Path) -> None:
    """Write a DataFrame to a (possibly gzipped) TSV atomically.

    The file is first written next to its final location and then
    renamed, so an interrupted write never leaves a truncated copy.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    df.to_csv(
        tmp_path,
        sep=NEISS_SEP,
        index=False,
        compression=_compression_for(path.name),
    )
    tmp_path.replace(path)


def _normalise(name: str, df: pd.DataFrame) -> pd.DataFrame:
    """Check required columns and coerce the types the pipeline relies on."""
    ensure_columns(df, NEISS_COLUMNS[name])
    df = df.copy()

    if "prod_code" in df.columns:
        df["prod_code"] = pd.to_numeric(df["prod_code"], errors="coerce").astype(
            "Int64"
        )
    if "age" in df.columns:
        df["age"] = pd.to_numeric(df["age"], errors="coerce")
    if name == "injuries":
        df["weight"] = pd.to_numeric(df["weight"], errors="coerce").astype(float)
        df["trmt_date"] = pd.to_datetime(df["trmt_date"], errors="coerce")
    if name == "population":
        df["population"] = pd.to_numeric(df["population"], errors="coerce")
    return df


def load_table(
    name: str,
    data_dir: Optional[Path] = None,
    *,
    source_base: Optional[str] = None,
    force_download: bool = False,
) -> pd.DataFrame:
    """
    Load one of the injury tables from disk, downloading it if needed.

    Parameters
    ----------
    name : str
        One of ``"injuries"``, ``"products"`` or ``"population"``.
    data_dir : Path, optional
        Local directory holding the files.  Defaults to
        :func:`resolve_data_dir`.
    source_base : str, optional
        Base URL (or directory) of the remote files.  Defaults to the
        ``NEISS_SOURCE`` environment variable or the configured URL.
    force_download : bool, optional
        If ``True``, ignore any local copy and read from the source.

    Returns
    -------
    pd.DataFrame
        The table with its columns checked and types normalised.
    """
    if name not in NEISS_FILES:
        raise KeyError(f"Unknown injury table {name!r}; expected one of {list(NEISS_FILES)}")

    filename = NEISS_FILES[name]
    directory = Path(data_dir) if data_dir is not None else resolve_data_dir()
    local_path = directory / filename

    if not force_download and local_path.exists():
        logger.info("Loading %s from %s", name, local_path)
        try:
            raw = pd.read_csv(local_path, sep=NEISS_SEP)
            return _normalise(name, raw)
        except (OSError, ValueError) as exc:
            logger.warning(
                "Error reading local copy %s: %s; falling back to source",
                local_path,
                exc,
            )

    base = (source_base or _source_base()).rstrip("/")
    remote = f"{base}/{filename}"
    logger.info("Downloading %s from %s", name, remote)
    raw = pd.read_csv(remote, sep=NEISS_SEP, compression=_compression_for(filename))

    try:
        _atomic_to_tsv(raw, local_path)
        logger.info("Cached %s at %s", name, local_path)
    except OSError as exc:
        logger.warning("Could not write local copy %s: %s", local_path, exc)

    return _normalise(name, raw)


def load_injury_data(
    data_dir: Optional[Path] = None,
    *,
    source_base: Optional[str] = None,
    force_download: bool = False,
) -> Dict[str, pd.DataFrame]:
    """Load all three injury tables keyed by name."""
    return {
        name: load_table(
            name,
            data_dir,
            source_base=source_base,
            force_download=force_download,
        )
        for name in NEISS_FILES
    }


@lru_cache(maxsize=1)
def _cached_payload() -> Dict[str, pd.DataFrame]:
    return load_injury_data()


def load_payload(force_download: bool = False) -> Dict[str, pd.DataFrame]:
    """
    Return the injury tables, loading them once per process.

    Parameters
    ----------
    force_download : bool, optional
        If ``True``, drop the in-memory copy and re-read every file from
        the remote source.
    """
    if force_download:
        _cached_payload.cache_clear()
        # Refresh the local copies, then refill the cache from them
        load_injury_data(force_download=True)
    return _cached_payload()
