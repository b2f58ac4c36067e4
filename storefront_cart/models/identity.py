"""Identity signal supplied by the auth provider"""

from pydantic import BaseModel, Field
from typing import Optional


class Identity(BaseModel):
    """Whose cart is active"""
    is_authenticated: bool = Field(default=False, alias="isAuthenticated")
    user_id: Optional[str] = Field(default=None, alias="userId")
    email: Optional[str] = None

    class Config:
        populate_by_name = True

    @classmethod
    def guest(cls) -> "Identity":
        return cls()

    @property
    def stable_id(self) -> Optional[str]:
        """User id, falling back to email"""
        for candidate in (self.user_id, self.email):
            if candidate and str(candidate).strip():
                return str(candidate).strip()
        return None
