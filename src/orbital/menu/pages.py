"""Menus supplied by each page of the site."""

from dataclasses import dataclass
from typing import Optional

from orbital.menu.geometry import HalfCircleDirection
from orbital.menu.radial_menu import RadialMenuItem

HOME_ITEMS = (
    RadialMenuItem("/", "HOME", "orbital"),
    RadialMenuItem("/about", "ABOUT", "book"),
    RadialMenuItem("/services", "SERVICES", "gear"),
    RadialMenuItem("/contact", "CONTACT", "mail"),
)


@dataclass(frozen=True)
class PageMenu:
    """Menu configuration for one page."""
    title: str
    items: tuple[RadialMenuItem, ...]
    hollow_radius: float
    half_circle: Optional[HalfCircleDirection] = None
    subtitle: str = ""


PAGE_MENUS: dict[str, PageMenu] = {
    "/": PageMenu(
        title="ORBITAL",
        subtitle="OPEN THE MENU TO NAVIGATE",
        items=HOME_ITEMS,
        hollow_radius=120.0,
    ),
    "/explore": PageMenu(
        title="EXPLORE",
        subtitle="ORBITAL IS PART OF GENERATE GROUP",
        items=(
            RadialMenuItem("/enlist", "ENLIST", "sunset_ships"),
            RadialMenuItem("/", "HOME", "orbital"),
            RadialMenuItem("/engage", "ENGAGE", "parabola"),
        ),
        hollow_radius=80.0,
        half_circle=HalfCircleDirection.BOTTOM,
    ),
    "/enlist": PageMenu(
        title="ENLIST",
        subtitle="JOIN THE CREW",
        items=(
            RadialMenuItem("/explore", "EXPLORE", "planet"),
            RadialMenuItem("/", "HOME", "orbital"),
            RadialMenuItem("/engage", "ENGAGE", "parabola"),
        ),
        hollow_radius=80.0,
        half_circle=HalfCircleDirection.BOTTOM,
    ),
    "/engage": PageMenu(
        title="ENGAGE",
        subtitle="MAKE CONTACT",
        items=(
            RadialMenuItem("/explore", "EXPLORE", "planet"),
            RadialMenuItem("/", "HOME", "orbital"),
            RadialMenuItem("/enlist", "ENLIST", "sunset_ships"),
        ),
        hollow_radius=80.0,
        half_circle=HalfCircleDirection.BOTTOM,
    ),
}


def page_menu(route: str) -> PageMenu:
    """Menu for a route; unknown routes get the home menu."""
    return PAGE_MENUS.get(route, PAGE_MENUS["/"])
