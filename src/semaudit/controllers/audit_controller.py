import logging
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence, Union

from pydantic import BaseModel, Field
from tqdm.auto import tqdm

from semaudit.errors import AuditError
from semaudit.model import Finding
from semaudit.services.analysis_service import analyze

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_UNREADABLE = 2


def exit_code_for(findings: Sequence[Finding]) -> int:
    """0 when no error-severity finding exists, 1 otherwise. Warnings never count."""
    return EXIT_FINDINGS if any(f.is_error for f in findings) else EXIT_OK


class DocumentResult(BaseModel):
    """Outcome of auditing one source in a batch."""
    source: str
    findings: List[Finding] = Field(default_factory=list)
    error: Optional[str] = None
    exit_code: int = EXIT_OK


class BatchResult(BaseModel):
    documents: List[DocumentResult] = Field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return max((d.exit_code for d in self.documents), default=EXIT_OK)

    @property
    def failed(self) -> List[DocumentResult]:
        return [d for d in self.documents if d.error]

    def rows(self) -> List[Dict[str, Any]]:
        """Flat rows for export and summaries: one per finding, tagged with its source."""
        return [
            {"source": doc.source, **finding.to_row()}
            for doc in self.documents
            for finding in doc.findings
        ]


def _worker_audit_document(
        path: str,
        rule_settings: Dict[str, Dict[str, Any]],
        strict: bool,
) -> Dict[str, Any]:
    """
    Worker function to audit a single document in a separate process.
    Returns plain dicts to keep pickling cheap.
    """
    try:
        result = analyze(path=path, rule_settings=rule_settings, strict=strict)
    except AuditError as e:
        logger.error("Worker failed on %s: %s", path, e)
        return {"source": path, "findings": [], "error": str(e), "exit_code": EXIT_UNREADABLE}

    return {
        "source": path,
        "findings": [f.to_row() for f in result.findings],
        "error": None,
        "exit_code": exit_code_for(result.findings),
    }


class AuditController:
    """
    Orchestrates the audit of many documents.
    Documents are independent, so they are spread over a process pool;
    results come back in input order.
    """

    def __init__(
            self,
            workers: int = 1,
            rule_settings: Optional[Dict[str, Dict[str, Any]]] = None,
            strict: bool = True,
            show_progress: bool = True,
    ):
        self.workers = max(1, int(workers))
        self.rule_settings = rule_settings or {}
        self.strict = strict
        self.show_progress = show_progress

    def run_batch(self, paths: Sequence[Union[str, Path]]) -> BatchResult:
        """Audits every path and collects the per-document results."""
        tasks = [str(p) for p in paths]
        func = partial(_worker_audit_document, rule_settings=self.rule_settings, strict=self.strict)

        progress = tqdm(total=len(tasks), desc="Auditing", unit="doc", disable=not self.show_progress)
        raw_results: List[Dict[str, Any]] = []
        try:
            if self.workers == 1 or len(tasks) <= 1:
                for task in tasks:
                    raw_results.append(func(task))
                    progress.update(1)
            else:
                with ProcessPoolExecutor(max_workers=self.workers) as executor:
                    for result in executor.map(func, tasks):
                        raw_results.append(result)
                        progress.update(1)
        finally:
            progress.close()

        documents = [
            DocumentResult(
                source=raw["source"],
                findings=[Finding.from_row(row) for row in raw["findings"]],
                error=raw["error"],
                exit_code=raw["exit_code"],
            )
            for raw in raw_results
        ]

        batch = BatchResult(documents=documents)
        total = sum(len(d.findings) for d in documents)
        logger.info(
            "Batch audit finished: %d documents, %d findings, %d failed",
            len(documents), total, len(batch.failed)
        )
        return batch
