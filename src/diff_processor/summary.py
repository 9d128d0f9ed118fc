from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from diff_processor.detector import MissingDocDetails
from diff_processor.json_types import JSONObject
from diff_processor.order_contract import sort_once
from diff_processor.runtime import json_io
from diff_processor.schema import (
    MissingDocDetailsDTO,
    MissingDocFieldDTO,
    MissingDocsSummaryDTO,
)


@dataclass(frozen=True)
class MissingDocsSummary:
    resource: list[MissingDocDetails] = field(default_factory=list)
    data_source: list[MissingDocDetails] = field(default_factory=list)


def _ordered_details(
    detected: Mapping[str, MissingDocDetails],
    *,
    source: str,
) -> list[MissingDocDetails]:
    ordered: list[MissingDocDetails] = []
    for name in sort_once(detected, source=f"{source}.names"):
        details = detected[name]
        ordered.append(
            MissingDocDetails(
                name=name,
                file_path=details.file_path,
                fields=tuple(
                    sort_once(
                        details.fields,
                        source=f"{source}.fields",
                        key=lambda item: item.field,
                    )
                ),
            )
        )
    return ordered


def assemble_summary(
    resources: Mapping[str, MissingDocDetails],
    data_sources: Mapping[str, MissingDocDetails],
) -> MissingDocsSummary:
    """Merge both detectors' results into name- and field-ordered lists."""
    return MissingDocsSummary(
        resource=_ordered_details(resources, source="assemble_summary.resource"),
        data_source=_ordered_details(data_sources, source="assemble_summary.data_source"),
    )


def _details_dto(details: MissingDocDetails) -> MissingDocDetailsDTO:
    return MissingDocDetailsDTO(
        name=details.name,
        file_path=details.file_path,
        fields=[
            MissingDocFieldDTO(field=item.field, section=item.section)
            for item in details.fields
        ],
    )


def summary_payload(summary: MissingDocsSummary) -> JSONObject:
    dto = MissingDocsSummaryDTO(
        resource=[_details_dto(details) for details in summary.resource],
        data_source=[_details_dto(details) for details in summary.data_source],
    )
    return dto.model_dump(by_alias=True, exclude_none=True)


def render_summary(summary: MissingDocsSummary) -> str:
    return json_io.dump_json_pretty(summary_payload(summary))
