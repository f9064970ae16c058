"""Rules API: inspect and hot-reload the triage rules."""

from typing import Any

from fastapi import APIRouter, HTTPException

from inbox_triage.engine.rules import get_rules, reload_rules

router = APIRouter(prefix="/triage/rules", tags=["rules"])


@router.get("")
async def get_rules_config() -> dict[str, Any]:
    """Return the effective rules as JSON."""
    return get_rules().model_dump()


@router.post("/reload")
async def reload_rules_config() -> dict[str, str]:
    """Re-read the rules file; a broken file answers 422 and the current rules stay in effect."""
    try:
        reload_rules()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {"status": "reloaded"}
