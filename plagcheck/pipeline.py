import logging
import os
from typing import Optional, Tuple

import pandas as pd
import yaml
from tqdm import tqdm

from plagcheck.ngrams import NGramLimitError
from plagcheck.similarity import UNITS, compare, format_score

logger = logging.getLogger(__name__)

# default config keys used:
# ngram:
#   n: 3
#   unit: bytes
#   max_distinct: null
# limits:
#   max_bytes: 1000000

DEFAULT_MAX_BYTES = 1000000


def _read_yaml(path):
    with open(path, "r") as f:
        try:
            cfg = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"config {path} is not valid YAML: {e}")
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config {path} must be a mapping, got {type(cfg).__name__}")
    return cfg


def load_config(path=None):
    if path:
        if os.path.exists(path):
            return _read_yaml(path)
        logger.warning("config %s not found, using packaged defaults", path)
    # fallback packaged config
    return _read_yaml(os.path.join(os.path.dirname(__file__), "config_default.yaml"))


def _section(cfg: dict, name: str) -> dict:
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"config section {name!r} must be a mapping")
    return section


def _positive_int(value, key: str) -> int:
    # bool is an int subclass, yaml turns yes/no into bools
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{key} must be an integer >= 1, got {value!r}")
    return value


def ngram_options(cfg: dict) -> dict:
    """Pull the keyword arguments for compare() out of a loaded config."""
    ngram_cfg = _section(cfg, "ngram")
    n = _positive_int(ngram_cfg.get("n", 3), "ngram.n")
    unit = str(ngram_cfg.get("unit", "bytes"))
    max_distinct = ngram_cfg.get("max_distinct")
    if max_distinct is not None:
        max_distinct = _positive_int(max_distinct, "ngram.max_distinct")
    if unit not in UNITS:
        raise ValueError(f"ngram.unit must be one of {UNITS}, got {unit!r}")
    return {
        "n": n,
        "unit": unit,
        "max_distinct": max_distinct,
        "encoding": str(ngram_cfg.get("encoding", "utf-8")),
    }


def limits_options(cfg: dict) -> int:
    """Return the per-document read bound, limits.max_bytes."""
    limits_cfg = _section(cfg, "limits")
    return _positive_int(limits_cfg.get("max_bytes", DEFAULT_MAX_BYTES), "limits.max_bytes")


def output_precision(cfg: dict) -> int:
    precision = _section(cfg, "output").get("precision", 2)
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise ValueError(f"output.precision must be an integer >= 0, got {precision!r}")
    return precision


def read_document(path: str, max_bytes: int = DEFAULT_MAX_BYTES) -> bytes:
    """
    Read at most max_bytes from path. Anything beyond the bound is dropped:
    truncation is lossy and only reported as a warning.
    """
    if max_bytes < 1:
        raise ValueError(f"max_bytes must be >= 1, got {max_bytes}")
    with open(path, "rb") as f:
        data = f.read(max_bytes)
        truncated = bool(f.read(1))
    if truncated:
        logger.warning("%s is larger than %d bytes, truncated", path, max_bytes)
    logger.info("read %s (%d bytes)", path, len(data))
    return data


def compare_files(original: str, plagiarized: str, cfg: dict) -> float:
    max_bytes = limits_options(cfg)
    opts = ngram_options(cfg)
    original_text = read_document(original, max_bytes)
    plagiarized_text = read_document(plagiarized, max_bytes)
    logger.info("computing %d-gram similarity over %s", opts["n"], opts["unit"])
    score = compare(original_text, plagiarized_text, **opts)
    logger.debug("%s vs %s -> %f", original, plagiarized, score)
    return score


def write_result(score: float, output_path: str, precision: int = 2) -> None:
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    with open(output_path, "w") as f:
        f.write(format_score(score, precision) + "\n")


def run_pair(original: str, plagiarized: str, output: str, config_path: str = None) -> float:
    cfg = load_config(config_path)
    precision = output_precision(cfg)
    score = compare_files(original, plagiarized, cfg)
    write_result(score, output, precision)
    logger.info("saved result to %s", output)
    return score


def run_batch(manifest_csv: str, output_csv: str,
              config_path: str = None) -> Tuple[pd.DataFrame, Optional[str]]:
    """
    Score every (original, plagiarized) pair listed in a CSV manifest.
    Each row is compared on its own; rows whose files cannot be read keep an
    empty score and carry the error message instead.
    Returns (df, flagged_path).
    """
    cfg = load_config(config_path)
    batch_cfg = _section(cfg, "batch")
    orig_col = batch_cfg.get("original_column", "original")
    plag_col = batch_cfg.get("plagiarized_column", "plagiarized")
    flag_th = batch_cfg.get("flag_threshold", 0.8)
    if isinstance(flag_th, bool) or not isinstance(flag_th, (int, float)):
        raise ValueError(f"batch.flag_threshold must be a number, got {flag_th!r}")
    precision = output_precision(cfg)
    # fail before touching any row when the settings are invalid
    ngram_options(cfg)
    limits_options(cfg)

    df = pd.read_csv(manifest_csv, dtype=str).fillna("")
    for col in (orig_col, plag_col):
        if col not in df.columns:
            raise ValueError(f"manifest {manifest_csv} has no {col!r} column")

    base_dir = os.path.dirname(os.path.abspath(manifest_csv))

    df["Similarity"] = None
    df["Flagged"] = False
    df["Error"] = ""

    flagged_rows = []
    for i, row in tqdm(df.iterrows(), total=len(df), desc="pairs", disable=len(df) < 2):
        original = os.path.join(base_dir, row[orig_col])
        plagiarized = os.path.join(base_dir, row[plag_col])
        try:
            score = compare_files(original, plagiarized, cfg)
        except (OSError, NGramLimitError) as e:
            logger.warning("row %s skipped: %s", i, e)
            df.at[i, "Error"] = str(e)
            continue
        # flag on the stored value so the CSV and the flag agree
        rounded = round(score, precision)
        df.at[i, "Similarity"] = rounded
        if rounded >= flag_th:
            df.at[i, "Flagged"] = True
            flagged_rows.append(i)

    # save outputs
    os.makedirs(os.path.dirname(output_csv) or ".", exist_ok=True)
    df.to_csv(output_csv, index=False)

    flagged_path = None
    if flagged_rows:
        flagged_df = df.loc[flagged_rows].copy()
        root, ext = os.path.splitext(output_csv)
        flagged_path = f"{root}.flagged{ext or '.csv'}"
        flagged_df.to_csv(flagged_path, index=False)

    return df, flagged_path
