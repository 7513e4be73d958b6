"""Utility modules."""
from academy.utils.json_utils import json_dump, json_load, read_json_file, write_json_file

__all__ = ["json_dump", "json_load", "read_json_file", "write_json_file"]
