from pydantic import BaseModel
from typing import Dict, List, Optional

class UpdateRun(BaseModel):
    run_id: str

class PriceAnchor(BaseModel):
    sp: float
    cp: float
    u: Optional[str] = None

class ReturnsResponse(BaseModel):
    as_of: Optional[str] = None
    returns: Dict[str, float]
    pending: List[str]
    latest_snapshot: Optional[dict] = None
