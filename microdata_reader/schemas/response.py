from typing import Dict, List, Any, Optional
from pydantic import BaseModel


class ItemModel(BaseModel):
    type: Optional[List[str]] = None
    id: Optional[str] = None
    properties: Dict[str, List[Any]]


class ExtractResult(BaseModel):
    items: Optional[List[ItemModel]] = None
    fetch_mode: Optional[str] = None
    error: Optional[str] = None


class ExtractResponse(BaseModel):
    total: int
    results: Dict[str, ExtractResult]
