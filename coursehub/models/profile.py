"""
Profile and auth session models
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Profile(BaseModel):
    """Row of the profiles table, keyed by the auth user id"""
    model_config = ConfigDict(extra='ignore')

    user_id: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    role: Optional[str] = None


class AuthSession(BaseModel):
    """
    The signed-in user's session.

    Established on sign-in, cleared on sign-out and read-only everywhere
    else; views and services receive it as an argument.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    email: Optional[str] = None
    access_token: str = Field(repr=False)
    refresh_token: Optional[str] = Field(default=None, repr=False)

    @property
    def display_name(self) -> str:
        return self.email or self.user_id
