"""
Stores generated insights in a JSON file keyed by insight id.
A small local stand-in for a document database; good enough for a single
scheduled process. The economy and IT analyses save from separate worker
threads, so every access to the dict and the file goes through one lock.
"""
import json
import threading
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from dailybrief.core.entities import Domain, Insight
from dailybrief.core.exceptions import InsightNotFoundError, InsightStoreError

from utils.logging_setup import get_logger
logger = get_logger(__name__, log_file="adapters.log")

_insight_adapter = TypeAdapter(Insight)


class JsonInsightStore:
    def __init__(self, insights_file: str = "data/insights.json"):
        self.insights_file = Path(insights_file)
        self.insights_file.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self.insights: Dict[str, Insight] = self._load()

    def _load(self) -> Dict[str, Insight]:
        """Load stored insights from file."""
        if not self.insights_file.exists():
            return {}
        try:
            with open(self.insights_file, 'r', encoding="utf-8") as f:
                data = json.load(f)
            return {item["id"]: _insight_adapter.validate_python(item) for item in data.get("insights", [])}
        except (json.JSONDecodeError, KeyError, ValidationError) as e:
            raise InsightStoreError(f"Corrupt insight store {self.insights_file}: {e}") from e

    def _save(self):
        """Write all insights back to file. Caller holds the lock."""
        payload = {"insights": [_insight_adapter.dump_python(i, mode="json") for i in self.insights.values()]}
        try:
            with open(self.insights_file, 'w', encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise InsightStoreError(f"Cannot write {self.insights_file}: {e}") from e

    def save(self, insight: Insight):
        """Add a new insight (or overwrite one with the same id)."""
        with self._lock:
            self.insights[insight.id] = insight
            self._save()
        logger.debug(f"save: Stored insight '{insight.id}' ({insight.title})")

    def find_by_domain(self, domain) -> List[Insight]:
        domain = Domain(domain)
        with self._lock:
            return [i for i in self.insights.values() if i.domain == domain.value]

    def find_by_id(self, insight_id: str) -> Optional[Insight]:
        with self._lock:
            return self.insights.get(insight_id)

    def all(self) -> List[Insight]:
        with self._lock:
            return list(self.insights.values())

    def update(self, insight: Insight):
        """Replace an existing insight; unknown ids are an error."""
        with self._lock:
            if insight.id not in self.insights:
                raise InsightNotFoundError(insight.id)
            self.insights[insight.id] = insight
            self._save()
        logger.debug(f"update: Updated insight '{insight.id}' (status={insight.status.value})")

    def get_count(self) -> int:
        with self._lock:
            return len(self.insights)
