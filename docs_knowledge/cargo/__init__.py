"""Adapters around the cargo toolchain."""

from .command import CommandResult, run_command
from .doc import CargoDocBuilder
from .metadata import CargoMetadataResolver

__all__ = ["CargoDocBuilder", "CargoMetadataResolver", "CommandResult", "run_command"]
