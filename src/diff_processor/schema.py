from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MissingDocFieldDTO(BaseModel):
    field: str
    section: Optional[str] = None


class MissingDocDetailsDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    file_path: str = Field(alias="filePath")
    fields: List[MissingDocFieldDTO] = []


class MissingDocsSummaryDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resource: List[MissingDocDetailsDTO] = []
    data_source: List[MissingDocDetailsDTO] = Field(default=[], alias="dataSource")
