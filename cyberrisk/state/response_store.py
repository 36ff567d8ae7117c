"""Persisted assessment state.

Layout (what the report renderer reads back):
- assessmentResponses: serialized Response list, most recent last
- leadData: lead-capture form data, or the anonymous placeholder

Storage is a plain key-value store. The file-backed store keeps one JSON
file per key under a state directory, each wrapped with the time it was saved.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional

from cyberrisk.util.io import ensure_dir, read_json, write_json
from cyberrisk.util.time import now_utc
from cyberrisk.util.types import Response

logger = logging.getLogger(__name__)

RESPONSES_KEY = 'assessmentResponses'
LEAD_KEY = 'leadData'


class KeyValueStore:
    """Minimal key-value store interface."""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store. Nothing survives the interpreter."""

    def __init__(self):
        self._data: Dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """File-based store, one JSON file per key.

    Each file holds the value plus the timestamp it was written at.
    Corrupt or unreadable files read back as absent.
    """

    def __init__(self, state_dir: Path):
        self.state_dir = ensure_dir(Path(state_dir))

    def _key_file(self, key: str) -> Path:
        # Keys are plain identifiers, but keep the filesystem safe anyway
        safe_key = key.replace("/", "_").replace(":", "_").replace("?", "_")
        return self.state_dir / f"{safe_key}.json"

    def get(self, key: str) -> Optional[Any]:
        stored = read_json(self._key_file(key))
        if stored is None:
            return None
        if not isinstance(stored, dict) or 'data' not in stored:
            logger.warning(f"Ignoring malformed state file for key '{key}'")
            return None
        return stored['data']

    def set(self, key: str, value: Any) -> None:
        write_json(self._key_file(key), {
            'timestamp': now_utc().isoformat(),
            'data': value,
        })

    def delete(self, key: str) -> None:
        key_file = self._key_file(key)
        if key_file.exists():
            key_file.unlink()
            logger.debug(f"Deleted {key_file}")


@dataclass
class LeadData:
    """Contact details captured before showing results."""
    first_name: str
    last_name: str
    email: str
    company: str
    job_title: str
    phone: Optional[str] = None

    @classmethod
    def anonymous(cls) -> 'LeadData':
        """Placeholder stored when the lead form is skipped."""
        return cls(
            first_name='Anonymous',
            last_name='User',
            email='anonymous@example.com',
            company='Not provided',
            job_title='Not provided',
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'company': self.company,
            'jobTitle': self.job_title,
        }
        if self.phone:
            data['phone'] = self.phone
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LeadData':
        return cls(
            first_name=data.get('firstName', ''),
            last_name=data.get('lastName', ''),
            email=data.get('email', ''),
            company=data.get('company', ''),
            job_title=data.get('jobTitle', ''),
            phone=data.get('phone'),
        )


class AssessmentStore:
    """Reads and writes the persisted assessment layout on a key-value store."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def save_responses(self, responses: List[Response]) -> None:
        self.store.set(RESPONSES_KEY, [r.to_dict() for r in responses])
        logger.debug(f"Saved {len(responses)} responses")

    def load_responses(self) -> List[Response]:
        """Persisted responses, empty when nothing usable is stored."""
        raw = self.store.get(RESPONSES_KEY)
        if not isinstance(raw, list):
            return []
        return [Response.from_dict(item) for item in raw if isinstance(item, dict)]

    def save_lead(self, lead: LeadData) -> None:
        self.store.set(LEAD_KEY, lead.to_dict())

    def load_lead(self) -> Optional[LeadData]:
        raw = self.store.get(LEAD_KEY)
        if not isinstance(raw, dict):
            return None
        return LeadData.from_dict(raw)

    def clear(self) -> None:
        """Forget everything from a previous assessment."""
        self.store.delete(RESPONSES_KEY)
        self.store.delete(LEAD_KEY)
        logger.info("Cleared persisted assessment state")

