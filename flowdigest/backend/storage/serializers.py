"""
storage/serializers.py

Pydantic models for the output document.

Wire names are a compatibility contract with downstream consumers:
camelCase inside "metadata", hyphenated keys inside each "data" entry.
Fields are populated by their Python names and emitted with by_alias=True.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..aggregation.models import FlowRecord
from ..models import RunMetadata


class FlowRecordDocument(BaseModel):
    key: str
    source_ip: str = Field(serialization_alias="source-ip")
    destination_ip: str = Field(serialization_alias="destination-ip")
    packets_in: int = Field(ge=0, serialization_alias="packets-in")
    bytes_in: int = Field(ge=0, serialization_alias="bytes-in")
    packets_out: int = Field(ge=0, serialization_alias="packets-out")
    bytes_out: int = Field(ge=0, serialization_alias="bytes-out")
    count: int = Field(ge=1)

    @classmethod
    def from_record(cls, record: FlowRecord) -> "FlowRecordDocument":
        return cls(
            key=record.key,
            source_ip=record.source_ip,
            destination_ip=record.destination_ip,
            packets_in=record.packets_in,
            bytes_in=record.bytes_in,
            packets_out=record.packets_out,
            bytes_out=record.bytes_out,
            count=record.count,
        )


class ProcessingPerformance(BaseModel):
    connections_per_second: str = Field(serialization_alias="connectionsPerSecond")


class MetadataDocument(BaseModel):
    start_time: int = Field(serialization_alias="startTime")
    end_time: int = Field(serialization_alias="endTime")
    elapsed_time: float = Field(serialization_alias="elapsedTime")
    total_connections: int = Field(serialization_alias="totalConnections")
    session_close: str = Field(serialization_alias="sessionClose")
    flows: int
    files_processed: list[str] = Field(serialization_alias="filesProcessed")
    processing_performance: ProcessingPerformance = Field(
        serialization_alias="processingPerformance"
    )

    @classmethod
    def from_metadata(cls, metadata: RunMetadata) -> "MetadataDocument":
        return cls(
            start_time=metadata.start_time,
            end_time=metadata.end_time,
            elapsed_time=metadata.elapsed_seconds,
            total_connections=metadata.total_connections,
            session_close=metadata.session_close,
            flows=metadata.flows,
            files_processed=list(metadata.files_processed),
            processing_performance=ProcessingPerformance(
                connections_per_second=metadata.connections_per_second_text,
            ),
        )


class RunDocument(BaseModel):
    metadata: MetadataDocument
    data: dict[str, FlowRecordDocument]

    @classmethod
    def build(
        cls,
        metadata: RunMetadata,
        flows: dict[str, FlowRecord],
    ) -> "RunDocument":
        return cls(
            metadata=MetadataDocument.from_metadata(metadata),
            data={key: FlowRecordDocument.from_record(r) for key, r in flows.items()},
        )

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
