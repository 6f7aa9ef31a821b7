from typing import Any, Literal, TypedDict


class AudioReference(TypedDict):
    kind: Literal["local", "remote"]
    value: str


class DownloadResult(TypedDict):
    output_dir: str
    output: str


class DecodedStream(TypedDict):
    path: str
    handle: Any
