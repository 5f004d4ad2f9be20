"""Newline-delimited JSON helpers for export endpoints."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, AsyncIterator, List, Union

from .response import APIResponse
from .serialization import loads


def clean_line(line: bytes) -> bytes:
    """Strip surrounding whitespace and the leading comma some exports emit."""
    line = line.strip()
    if line.startswith(b","):
        line = line[1:]
    return line


def split_ndjson(raw: bytes) -> List[bytes]:
    """Split an export body into raw JSON records, skipping blank lines."""
    records = []
    for line in raw.split(b"\n"):
        line = clean_line(line)
        if line:
            records.append(line)
    return records


@dataclass
class NDJSONResponse(APIResponse[List[bytes]]):
    """Export response whose body is a list of raw JSON records."""

    def records(self) -> List[Any]:
        return [loads(record) for record in self.body or []]

    def write_to_file(self, path: Union[str, os.PathLike]) -> None:
        """Write each record followed by a newline."""
        with open(path, "wb") as fh:
            for record in self.body or []:
                fh.write(record)
                fh.write(b"\n")

    async def aiter_records(self) -> AsyncIterator[bytes]:
        """Yield records from a streamed export, or from the buffered body."""
        if self.stream is None:
            for record in self.body or []:
                yield record
            return
        try:
            async for line in self.stream.aiter_lines():
                record = clean_line(line.encode("utf-8"))
                if record:
                    yield record
        finally:
            await self.stream.aclose()
