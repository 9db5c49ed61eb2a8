"""Local persistence for templates and submissions."""
from checkmaster.storage.store import SUBMISSIONS_KEY, TEMPLATES_KEY, JsonStore, default_store_path

__all__ = ["SUBMISSIONS_KEY", "TEMPLATES_KEY", "JsonStore", "default_store_path"]
