"""Parameter loaders (JSON, CSV, pandas)."""

from .loaders import (
    JSONParametersSource,
    load_parameters_csv,
    load_parameters_json,
    parameters_from_dict,
    parameters_from_frame,
    parameters_to_frame,
)

__all__ = [
    "JSONParametersSource",
    "load_parameters_csv",
    "load_parameters_json",
    "parameters_from_dict",
    "parameters_from_frame",
    "parameters_to_frame",
]
