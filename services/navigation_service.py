"""
Navegação por papel: que telas cada papel pode ver
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class NavigationItem:
    id: str
    path: str
    label: str
    roles: Tuple[str, ...]


NAVIGATION_ITEMS: List[NavigationItem] = [
    NavigationItem("dashboard", "/dashboard", "Dashboard", ("admin", "manager", "customer")),
    NavigationItem("inventory", "/inventory", "Item Master", ("admin", "manager")),
    NavigationItem("inbound", "/inbound", "Inbound & Putaway", ("admin", "manager", "staff")),
    NavigationItem("pick-pack", "/pick-pack", "Pick and Pack", ("admin", "manager", "staff")),
    NavigationItem("dispatch", "/dispatch", "Dispatch", ("admin", "manager", "staff")),
    NavigationItem("warehouse", "/warehouse/map", "Warehouse Map", ("admin", "manager")),
    NavigationItem("reports", "/reports", "Reports", ("admin", "manager")),
]


class NavigationService:

    @staticmethod
    def visible_items(role_slug: Optional[str]) -> List[NavigationItem]:
        if not role_slug:
            return []
        return [item for item in NAVIGATION_ITEMS if role_slug in item.roles]

    @staticmethod
    def can_access(role_slug: Optional[str], item_id: str) -> bool:
        return any(item.id == item_id for item in NavigationService.visible_items(role_slug))

    @staticmethod
    def default_landing(role_slug: Optional[str]) -> Optional[str]:
        """Primeira tela permitida (dashboard para quem o vê)"""
        items = NavigationService.visible_items(role_slug)
        return items[0].path if items else None
