"""Output formatters for the CLI."""

from boatrace.cli.formatters.serialize import dump_json, to_jsonable

__all__ = ["dump_json", "to_jsonable"]
