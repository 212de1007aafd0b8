import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from brandaudit.core.config import settings

logger = logging.getLogger(__name__)

@dataclass
class AnalysisRecord:
    id: str
    guideline_id: Optional[Any]
    brand_name: str
    website_url: str
    score: int
    total_violations: int
    severity_breakdown: Dict[str, int]
    report: Dict[str, Any]
    processing_time_ms: float = 0.0
    elements_analyzed: int = 0
    analysis_type: str = "brand_audit"
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "guideline_id": self.guideline_id,
            "brand_name": self.brand_name,
            "website_url": self.website_url,
            "score": self.score,
            "total_violations": self.total_violations,
            "severity_breakdown": self.severity_breakdown,
            "report": self.report,
            "processing_time_ms": round(self.processing_time_ms, 2),
            "elements_analyzed": self.elements_analyzed,
            "analysis_type": self.analysis_type,
            "created_at": self.created_at.isoformat(),
        }

class AnalysisStore:
    """
    Keeps analysis results for later retrieval.
    Injected where needed; each instance is independent and reset() empties it.
    Holds at most max_records results; inserting past that evicts the oldest.
    """

    def __init__(self, max_records: int = settings.MAX_STORED_ANALYSES):
        if max_records < 1:
            raise ValueError(f"max_records must be positive, got {max_records}")
        self.max_records = max_records
        self._records: Dict[str, AnalysisRecord] = {}
        self._lock = threading.Lock()

    def create(self, **fields: Any) -> AnalysisRecord:
        record = AnalysisRecord(id=str(uuid.uuid4()), **fields)
        with self._lock:
            self._records[record.id] = record
            evicted = 0
            while len(self._records) > self.max_records:
                # dicts keep insertion order, so the first key is the oldest record
                del self._records[next(iter(self._records))]
                evicted += 1
        if evicted:
            logger.info(f"Analysis store full: evicted {evicted} oldest record(s) (max {self.max_records}).")
        logger.info(f"Analysis {record.id} stored ({record.brand_name}, score {record.score}).")
        return record

    def get(self, analysis_id: str) -> Optional[AnalysisRecord]:
        with self._lock:
            return self._records.get(analysis_id)

    def list_recent(self, limit: int = 10) -> List[AnalysisRecord]:
        with self._lock:
            records = list(self._records.values())
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records[:max(limit, 0)]

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def reset(self) -> None:
        with self._lock:
            self._records.clear()
