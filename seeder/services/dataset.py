"""Product dataset reader.

Records come from either a JSON array (``.json``) or one JSON object per line
(``.jsonl``). JSON-lines files are read lazily; arrays are parsed once and
validated lazily, record by record.
"""

import json
import logging
from collections.abc import Iterator
from itertools import islice
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from seeder.core.errors import PreconditionError, ValidationError
from seeder.schemas.dataset import ProductRecord

logger = logging.getLogger(__name__)


class SourceDataset:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _raw_items(self) -> Iterator[Any]:
        if self.path.suffix == ".jsonl":
            with self.path.open(encoding="utf-8") as fh:
                for line in fh:
                    line = line.strip()
                    if line:
                        yield json.loads(line)
            return

        with self.path.open(encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, list):
            raise ValidationError(f"Dataset {self.path} must contain a JSON array of records.")
        yield from data

    def iter_records(self, limit: int | None = None) -> Iterator[ProductRecord]:
        """Yield up to ``limit`` validated records in file order."""
        if not self.path.is_file():
            raise PreconditionError(f"Dataset not found: {self.path}")

        logger.info(f"Reading records from {self.path}")
        try:
            for position, item in enumerate(islice(self._raw_items(), limit), start=1):
                try:
                    yield ProductRecord.model_validate(item)
                except PydanticValidationError as exc:
                    raise ValidationError(
                        f"Record #{position} in {self.path} is invalid: {exc.error_count()} error(s), "
                        f"first: {exc.errors()[0]['msg']}"
                    ) from exc
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Dataset {self.path} is not valid JSON: {exc}") from exc

    def load(self, limit: int | None = None) -> list[ProductRecord]:
        return list(self.iter_records(limit))
