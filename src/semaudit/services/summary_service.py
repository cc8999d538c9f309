# src/semaudit/services/summary_service.py
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

logger = logging.getLogger(__name__)

ROW_COLUMNS = ["source", "rule", "severity", "message", "path"]


def build_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Flat findings rows ({source, rule, severity, message, path}) as a DataFrame."""
    return pd.DataFrame(rows, columns=ROW_COLUMNS)


def summarize(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Counts findings per (rule, severity) and the number of documents affected.
    Sorted by count descending, then rule id.
    """
    df = build_frame(rows)
    if df.empty:
        return pd.DataFrame(columns=["rule", "severity", "count", "documents"])

    summary = (
        df.groupby(["rule", "severity"])
        .agg(count=("path", "size"), documents=("source", "nunique"))
        .reset_index()
        .sort_values(["count", "rule"], ascending=[False, True])
        .reset_index(drop=True)
    )
    return summary


def export_csv(rows: List[Dict[str, Any]], output: Union[str, Path]) -> Path:
    """Writes the flat findings rows to a CSV file and returns its path."""
    output = Path(output)
    if output.parent and not output.parent.exists():
        output.parent.mkdir(parents=True, exist_ok=True)

    build_frame(rows).to_csv(output, index=False)
    logger.info("Exported %d findings to %s", len(rows), output)
    return output
