"""
Sidebar navigation schemas and the default dashboard navigation.
"""
from __future__ import annotations

from pydantic import BaseModel


class SidebarHeader(BaseModel):
    app_name: str
    app_initial: str
    subtitle: str


class NavigationItem(BaseModel):
    title: str
    url: str
    icon: str
    is_active: bool = False


class NavigationGroup(BaseModel):
    label: str
    items: list[NavigationItem]


DEFAULT_HEADER = SidebarHeader(app_name="Starter App", app_initial="S", subtitle="Dashboard")

DEFAULT_NAVIGATION: tuple[NavigationGroup, ...] = (
    NavigationGroup(
        label="Navigation",
        items=[
            NavigationItem(title="Overview", url="/dashboard", icon="layout-dashboard"),
            NavigationItem(title="Tasks", url="/dashboard/tasks", icon="check-square"),
            NavigationItem(title="Users", url="/dashboard/users", icon="users"),
            NavigationItem(title="Settings", url="/dashboard/settings", icon="settings"),
        ],
    ),
    NavigationGroup(
        label="Quick Links",
        items=[NavigationItem(title="Home", url="/", icon="home")],
    ),
)


def build_navigation(current_path: str) -> list[NavigationGroup]:
    """
    Copy the default navigation, marking the item that owns ``current_path`` active.
    The longest matching URL wins so "/dashboard/tasks" does not also light up "/dashboard".
    """
    path = current_path.rstrip("/") or "/"
    best: str | None = None
    for group in DEFAULT_NAVIGATION:
        for item in group.items:
            if path == item.url or (item.url != "/" and path.startswith(item.url + "/")):
                if best is None or len(item.url) > len(best):
                    best = item.url

    return [
        NavigationGroup(
            label=group.label,
            items=[
                item.model_copy(update={"is_active": item.url == best})
                for item in group.items
            ],
        )
        for group in DEFAULT_NAVIGATION
    ]
