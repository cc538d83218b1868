from typing import Any, ClassVar, Dict, Mapping
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SheetRecord(BaseModel):
    """A typed snapshot of one spreadsheet row.

    ``COLUMNS`` maps sheet header names to model field names. Only mapped
    headers are read; the field validators on each subclass parse the raw
    cell strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    COLUMNS: ClassVar[Dict[str, str]] = {}

    @classmethod
    def from_row(cls, row: Mapping[str, Any]):
        data = {}
        for header, field in cls.COLUMNS.items():
            if header in row and field not in data:
                data[field] = row[header]
        return cls(**data)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
