from __future__ import annotations

import json
from typing import Any, Iterable, Iterator, Mapping, Tuple

from pydantic import ValidationError

from .models import Envelope


class MessageParseError(ValueError):
    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.code = "message.invalid"
        self.message = message
        self.line_number = line_number


def parse_envelope(payload: str | bytes | Mapping[str, Any]) -> Envelope:
    if isinstance(payload, Mapping):
        try:
            return Envelope.model_validate(dict(payload))
        except ValidationError as exc:
            raise MessageParseError(f"invalid envelope: {exc}") from exc
    try:
        return Envelope.model_validate_json(payload)
    except ValidationError as exc:
        raise MessageParseError(f"invalid envelope: {exc}") from exc


def _decoded_lines(lines: Iterable[str | bytes]) -> Iterator[Tuple[int, str]]:
    iterator = iter(lines)
    line_number = 0
    while True:
        line_number += 1
        try:
            raw = next(iterator)
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
        except StopIteration:
            return
        except UnicodeDecodeError as exc:
            raise MessageParseError(
                f"line {line_number}: not valid UTF-8 ({exc.reason})",
                line_number=line_number,
            ) from exc
        yield line_number, raw


def read_envelopes(lines: Iterable[str | bytes]) -> Iterator[Envelope]:
    """Yield one envelope per non-blank NDJSON line, in stream order."""
    for line_number, raw in _decoded_lines(lines):
        if not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MessageParseError(
                f"line {line_number}: not valid JSON ({exc.msg})",
                line_number=line_number,
            ) from exc
        if not isinstance(data, dict):
            raise MessageParseError(
                f"line {line_number}: expected a JSON object",
                line_number=line_number,
            )
        try:
            yield Envelope.model_validate(data)
        except ValidationError as exc:
            raise MessageParseError(
                f"line {line_number}: invalid envelope: {exc}",
                line_number=line_number,
            ) from exc
