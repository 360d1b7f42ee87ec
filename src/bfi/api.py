from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .interpreter import Interpreter


@dataclass(frozen=True)
class RunOptions:
    encoding: str = "utf-8"


@dataclass(frozen=True)
class RunResult:
    output: bytes

    @property
    def text(self) -> str:
        return self.output.decode("latin-1")


def _as_bytes(data: Union[bytes, str]) -> bytes:
    if isinstance(data, str):
        return data.encode("latin-1")
    return bytes(data)


def run_string(code: str, input_data: Union[bytes, str] = b"") -> RunResult:
    reader = io.BytesIO(_as_bytes(input_data))
    writer = io.BytesIO()
    Interpreter().execute(code, reader, writer)
    return RunResult(output=writer.getvalue())


def run_file(path: str | Path, input_data: Union[bytes, str] = b"", *, options: Optional[RunOptions] = None) -> RunResult:
    opts = options or RunOptions()
    p = Path(path)
    return run_string(p.read_text(encoding=opts.encoding), input_data)
