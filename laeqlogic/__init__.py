import logging as _logging

from . import (
    canon,
    exceptions,
    types,
    utils,
    config,
    validate,
    ingest,
    laeq,
    windows,
    downsample,
    summary,
    formats,
    cache,
)

__all__ = [
    "canon",
    "exceptions",
    "types",
    "utils",
    "config",
    "validate",
    "ingest",
    "laeq",
    "windows",
    "downsample",
    "summary",
    "formats",
    "cache",
]

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
