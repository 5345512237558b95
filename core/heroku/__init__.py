"""
core/heroku - Heroku Platform API 자산 수집

Usage:
    from core.heroku import HerokuClient, HerokuListing

    client = HerokuClient.from_credentials(credentials)
    listing = HerokuListing(client)
    result = listing.list_apps_by_organization()
"""

from .client import HerokuClient, create_session
from .collector import HerokuListing
from .export import dump_ip_list, write_ip_list
from .summary import (
    count_addon_types,
    count_by_type,
    count_dyno_types,
    merge_parallel,
    summary_list,
    total_unit_cost,
)
from .types import (
    AddOn,
    App,
    Dyno,
    DynoSize,
    HerokuApp,
    HerokuOrganization,
    IPList,
    IPListItem,
    Organization,
    Space,
    SpaceNAT,
    Team,
    TypeCount,
)

__all__: list[str] = [
    # Client / Collector
    "HerokuClient",
    "HerokuListing",
    "create_session",
    # Export
    "dump_ip_list",
    "write_ip_list",
    # Summary
    "count_by_type",
    "summary_list",
    "count_dyno_types",
    "count_addon_types",
    "merge_parallel",
    "total_unit_cost",
    # Types
    "Organization",
    "App",
    "Dyno",
    "AddOn",
    "DynoSize",
    "HerokuApp",
    "HerokuOrganization",
    "TypeCount",
    "Team",
    "Space",
    "SpaceNAT",
    "IPList",
    "IPListItem",
]
