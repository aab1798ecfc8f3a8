import json
import logging
import os
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from scoreboard.errors import StoragePersistError, StorageReadError
from . import ranking


# One lock per backing file, shared by every store pointing at it
_file_locks: Dict[str, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: str) -> threading.Lock:
    with _file_locks_guard:
        return _file_locks.setdefault(path, threading.Lock())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LeaderboardStore:
    """Single-file record store holding the ranked top-N list.

    Nothing is cached between calls: every operation reads the file, and
    ``submit`` rewrites it in full. All operations on the same file are
    serialized through a shared lock so concurrent submissions cannot
    overwrite each other.
    """

    def __init__(
        self,
        path: str,
        *,
        size: int = 10,
        name_max_length: int = 15,
        score_min: int = 0,
        score_max: int = 999999,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.path = os.path.abspath(path)
        self.size = size
        self.name_max_length = name_max_length
        self.score_min = score_min
        self.score_max = score_max
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or _utcnow
        self._lock = _lock_for(self.path)

    def initialize(self) -> None:
        """Make sure the backing file exists and holds a JSON array.

        Anything else is replaced with ``[]``. Raises StoragePersistError when
        the file cannot be written, in which case the service must not start.
        """
        with self._lock:
            try:
                with open(self.path, 'rb') as fh:
                    raw = fh.read()
            except FileNotFoundError:
                self.logger.info(f"[init] leaderboard file not found, creating {self.path}")
            except OSError as exc:
                self.logger.error(f"[init] error accessing leaderboard file: {exc}")
            else:
                self.logger.info('[init] leaderboard file found')
                try:
                    data = json.loads(raw.decode('utf-8'))
                except ValueError:
                    self.logger.warning('[init] leaderboard file contains invalid JSON or is not UTF-8, re-initializing')
                else:
                    if isinstance(data, list):
                        return
                    self.logger.warning('[init] leaderboard file does not contain an array, re-initializing')
            directory = os.path.dirname(self.path)
            try:
                os.makedirs(directory, exist_ok=True)
            except OSError as exc:
                self.logger.error(f"[init] could not create directory {directory}: {exc}")
                raise StoragePersistError(f"cannot create {directory}") from exc
            self._write('[]')
            self.logger.info('[init] leaderboard file initialized')

    def read(self) -> List[Any]:
        """Return the stored records exactly as persisted."""
        with self._lock:
            try:
                return self._load()
            except FileNotFoundError:
                self.logger.warning('[read] leaderboard file missing, returning empty list')
                return []

    def submit(self, name: Any, score: Any) -> List[Any]:
        """Merge a score into the leaderboard and return the persisted state."""
        ranking.validate_submission(name, score)
        name = ranking.normalize_name(name, self.name_max_length)
        score = ranking.clamp_score(score, self.score_min, self.score_max)
        self.logger.info(f"[submit] processing name={name!r} score={score}")

        with self._lock:
            entries = self._load_for_merge()
            outcome, previous = ranking.merge_score(entries, name, score, self.clock())
            if outcome == 'added':
                self.logger.info(f"[submit] adding new entry for {name!r} with score {score}")
            elif outcome == 'updated':
                self.logger.info(f"[submit] updating score for {name!r} from {previous} to {score}")
            else:
                self.logger.info(
                    f"[submit] score for {name!r} ({score}) is not higher than existing ({previous}), no update"
                )

            # An unchanged submission persists the loaded state verbatim,
            # even when it is unsorted or longer than the top-N bound.
            if outcome == 'unchanged':
                result = entries
            else:
                result = ranking.rank(entries, self.size)
                self.logger.info(f"[submit] leaderboard updated, top {self.size} size: {len(result)}")

            self._write(json.dumps(result, indent=2, ensure_ascii=False))
            return result

    def reset(self) -> List[Any]:
        with self._lock:
            self._write('[]')
        self.logger.info('[reset] leaderboard cleared')
        return []

    def _load(self) -> List[Any]:
        try:
            with open(self.path, 'rb') as fh:
                raw = fh.read()
        except FileNotFoundError:
            raise
        except OSError as exc:
            self.logger.error(f"[read] error reading leaderboard file: {exc}")
            raise StorageReadError(f"cannot read {self.path}") from exc
        try:
            data = json.loads(raw.decode('utf-8'))
        except ValueError as exc:
            self.logger.error(f"[read] leaderboard file is not valid UTF-8 JSON: {exc}")
            raise StorageReadError(f"invalid JSON in {self.path}") from exc
        if not isinstance(data, list):
            self.logger.error('[read] leaderboard file does not contain an array')
            raise StorageReadError(f"{self.path} does not hold a JSON array")
        return data

    def _load_for_merge(self) -> List[Any]:
        try:
            entries = self._load()
        except FileNotFoundError:
            self.logger.warning('[submit] leaderboard file missing, starting with empty list')
            return []
        except StorageReadError:
            self.logger.warning('[submit] leaderboard file unusable, starting with empty list')
            return []
        self.logger.info(f"[submit] read {len(entries)} entries from leaderboard file")
        return entries

    def _write(self, payload: str) -> None:
        try:
            with open(self.path, 'w', encoding='utf-8') as fh:
                fh.write(payload)
        except OSError as exc:
            self.logger.error(f"[persist] failed to write leaderboard file {self.path}: {exc}")
            raise StoragePersistError(f"cannot write {self.path}") from exc
