"""Authentication models"""

from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    claims: dict = {}

    @classmethod
    def from_userinfo(cls, userinfo: Optional[dict]) -> Optional["User"]:
        """
        Build a User from the Auth0 userinfo stored in the session.

        Returns:
            None when there is no userinfo or it carries no subject
        """
        if not userinfo or not userinfo.get("sub"):
            return None
        return cls(
            user_id=userinfo["sub"],
            email=userinfo.get("email"),
            name=userinfo.get("name"),
            claims=dict(userinfo),
        )
