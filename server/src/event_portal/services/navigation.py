"""Navigation links shown in the site header"""

from dataclasses import dataclass
from typing import List
from urllib.parse import quote

from event_portal.auth.admin_gate import AdminStatus


@dataclass(frozen=True)
class NavLink:
    label: str
    href: str
    active: bool = False


def build_navigation(status: AdminStatus, current_path: str) -> List[NavLink]:
    """Home and Events always; Admin for admins; Login or Logout by session state"""
    links = [("Home", "/"), ("Events", "/events")]
    if status.is_admin:
        links.append(("Admin", "/admin/events"))
    if status.user is None:
        links.append(("Login", f"/auth/login?returnTo={quote(current_path)}"))
    else:
        links.append(("Logout", "/auth/logout"))

    return [
        NavLink(label=label, href=href, active=href == current_path)
        for label, href in links
    ]
