from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

class StepInput(BaseModel):
    state: Any = None
    params: Any = None

class FirewallOutcome(BaseModel):
    ok: bool
    status: int
    request: Dict[str, Any] = Field(default_factory=dict)
    firewall_id: Optional[str] = None
    error: Optional[str] = None
    response: Dict[str, Any] = Field(default_factory=dict)

    def to_patch(self, action_key: str) -> Dict[str, Any]:
        # firewall_id and error are mutually exclusive in the emitted patch
        return {action_key: self.model_dump(exclude_none=True)}
