"""HTTP surface for the triage worklist."""

from inbox_triage.api.server import create_app

__all__ = ["create_app"]
