"""Pydantic parameter objects used at the gateway boundaries."""

from .adapter_params import AdapterParams
from .test_options import TestOptions

__all__ = ["AdapterParams", "TestOptions"]
