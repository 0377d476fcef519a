import json
from pathlib import Path

from pydantic import ValidationError

from app.logging_config import get_logger
from app.plans.schemas import FitnessPlan

logger = get_logger(__name__)

STORAGE_KEY = "fitness_plan"


class PlanStorage:
    """
    Хранилище последнего плана на стороне клиента.

    JSON-файл, в котором под ключом STORAGE_KEY лежит один план;
    новый план полностью перезаписывает старый.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading plan storage {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def save(self, plan: FitnessPlan) -> None:
        data = self._read()
        data[STORAGE_KEY] = plan.model_dump(mode="json", by_alias=True, exclude_none=True)
        self._write(data)

    def load(self) -> FitnessPlan | None:
        stored = self._read().get(STORAGE_KEY)
        if stored is None:
            return None
        try:
            return FitnessPlan.model_validate(stored)
        except ValidationError as e:
            logger.error(f"Error parsing stored plan: {e}")
            return None

    def clear(self) -> None:
        data = self._read()
        if STORAGE_KEY in data:
            del data[STORAGE_KEY]
            self._write(data)
