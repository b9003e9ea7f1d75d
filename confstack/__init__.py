"""Layered configuration from JSON objects, files, streams, key-per-file directories, in-memory settings and command-line arguments."""

__version__ = "0.1.0"

__all__ = [
    "commandline",
    "deserializers",
    "exceptions",
    "json_sources",
    "jsonext",
    "key_per_file",
    "providers",
]