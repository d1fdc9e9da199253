"""Alert rule API endpoints."""
from fastapi import APIRouter, Depends, HTTPException

from aetherfit.dependencies import get_alert_rules
from aetherfit.services.alert_rules import AlertRuleStore

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("")
async def list_alert_rules(store: AlertRuleStore = Depends(get_alert_rules)) -> dict:
    """
    List configured alert rules.

    Returns:
        Dictionary with count and list of rules
    """
    rules = store.list_rules()
    return {
        "count": len(rules),
        "alerts": [rule.to_wire() for rule in rules],
    }


@router.post("/{rule_id}/toggle")
async def toggle_alert_rule(
    rule_id: int,
    store: AlertRuleStore = Depends(get_alert_rules),
) -> dict:
    """
    Enable or disable an alert rule.

    Raises:
        HTTPException: 404 if rule not found
    """
    try:
        rule = store.toggle(rule_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Alert rule not found")

    return {"status": "success", "alert": rule.to_wire()}
