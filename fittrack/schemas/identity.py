from enum import Enum
from typing import Optional
from pydantic import BaseModel

class IdentityMode(str, Enum):
    demo = "demo"
    real = "real"

class Identity(BaseModel):
    """Who is acting. Supplied by the auth service, never created here."""
    owner_id: str
    mode: IdentityMode
    # demo owner_id this account was converted from, if any
    converted_from: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def is_demo(self) -> bool:
        return self.mode == IdentityMode.demo
