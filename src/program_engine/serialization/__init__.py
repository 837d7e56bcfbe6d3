"""Serialization module: program records for the record store."""

from program_engine.serialization.records import program_from_record, program_to_record

__all__ = ["program_from_record", "program_to_record"]
