"""Book records carried by the CSV wire format."""

from __future__ import annotations

import csv
import io
from typing import List

from pydantic import BaseModel, ConfigDict, Field

CSV_HEADER = ("title", "author", "coordinates")
UNKNOWN = "Unknown"


class BookRecord(BaseModel):
    title: str
    author: str
    coordinates: str = "[]"

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_identified(self) -> bool:
        return self.title != UNKNOWN or self.author != UNKNOWN


class BookTable(BaseModel):
    records: List[BookRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def to_csv(self) -> str:
        """Serialize with the fixed header and every field double-quoted."""
        buffer = io.StringIO()
        buffer.write(",".join(CSV_HEADER) + "\n")
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for record in self.records:
            writer.writerow([record.title, record.author, record.coordinates])
        return buffer.getvalue().rstrip("\n")


__all__ = ["BookRecord", "BookTable", "CSV_HEADER", "UNKNOWN"]
