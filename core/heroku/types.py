"""
core/heroku/types.py - Heroku resource dataclasses

Dataclasses for the Heroku Platform API entities used by the listing tool,
with parsers for API payloads and serializers for JSON/YAML output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

TEAM_TYPE_ENTERPRISE = "enterprise"


def _parse_time(value: Any) -> datetime | None:
    """Parse an API timestamp (e.g. 2012-01-01T12:00:00Z)"""
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _format_time(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _nested_name(data: dict[str, Any], key: str) -> str:
    nested = data.get(key) or {}
    return nested.get("name", "") if isinstance(nested, dict) else ""


# =============================================================================
# Organization / App pipeline
# =============================================================================


@dataclass(frozen=True)
class Organization:
    """Organization (billing/ownership group of apps)"""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Organization:
        return cls(id=data.get("id", ""), name=data.get("name", ""))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass
class App:
    """Application owned by an organization"""

    id: str
    name: str
    released_at: datetime | None = None
    updated_at: datetime | None = None
    stack: str = ""
    region: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> App:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            released_at=_parse_time(data.get("released_at")),
            updated_at=_parse_time(data.get("updated_at")),
            stack=_nested_name(data, "stack"),
            region=_nested_name(data, "region"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "released_at": _format_time(self.released_at),
            "updated_at": _format_time(self.updated_at),
            "stack": self.stack,
            "region": self.region,
        }


@dataclass
class Dyno:
    """Running process of an app"""

    id: str
    name: str
    size: str
    type: str = ""
    state: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Dyno:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            size=data.get("size", ""),
            type=data.get("type", ""),
            state=data.get("state", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "size": self.size,
            "type": self.type,
            "state": self.state,
        }


@dataclass
class AddOn:
    """Managed service attached to an app"""

    id: str
    name: str
    service_name: str
    plan_name: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> AddOn:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            service_name=_nested_name(data, "addon_service"),
            plan_name=_nested_name(data, "plan"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "service": self.service_name,
            "plan": self.plan_name,
        }


@dataclass
class DynoSize:
    """Dyno size class and its cost in dyno units"""

    name: str
    dyno_units: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DynoSize:
        return cls(name=data.get("name", ""), dyno_units=int(data.get("dyno_units") or 0))


@dataclass
class HerokuApp:
    """App with its dynos and add-ons"""

    app: App
    dynos: list[Dyno] = field(default_factory=list)
    addons: list[AddOn] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.app.name

    @property
    def is_running(self) -> bool:
        return len(self.dynos) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "application": self.app.to_dict(),
            "application_dynos": [d.to_dict() for d in self.dynos],
            "application_addons": [a.to_dict() for a in self.addons],
        }


@dataclass
class HerokuOrganization:
    """Organization with its apps (sorted by name after aggregation)"""

    organization: Organization
    apps: list[HerokuApp] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.organization.name

    def sort_apps(self) -> None:
        self.apps.sort(key=lambda a: a.name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "organization": self.organization.to_dict(),
            "organization_applications": [a.to_dict() for a in self.apps],
        }


@dataclass
class TypeCount:
    """Occurrence count of one dyno size or add-on service"""

    key: str
    total: int

    def __str__(self) -> str:
        return f"{self.key} {self.total}"


# =============================================================================
# Team / Space / NAT pipeline
# =============================================================================


@dataclass(frozen=True)
class Team:
    """Team; only enterprise teams own private spaces"""

    id: str
    name: str
    type: str = ""

    @property
    def is_enterprise(self) -> bool:
        return self.type == TEAM_TYPE_ENTERPRISE

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Team:
        return cls(id=data.get("id", ""), name=data.get("name", ""), type=data.get("type", ""))


@dataclass(frozen=True)
class Space:
    """Private network space owned by a team"""

    id: str
    name: str
    team_id: str
    team_name: str
    region: str = ""
    state: str = ""

    @property
    def composite_name(self) -> str:
        """Composite "Team/Space" name used in the IP list"""
        return f"{self.team_name}/{self.name}"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Space:
        team = data.get("team") or {}
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            team_id=team.get("id", ""),
            team_name=team.get("name", ""),
            region=_nested_name(data, "region"),
            state=data.get("state", ""),
        )


@dataclass
class SpaceNAT:
    """Outbound NAT sources of a space"""

    sources: list[str] = field(default_factory=list)
    state: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> SpaceNAT:
        return cls(sources=list(data.get("sources") or []), state=data.get("state", ""))


@dataclass
class IPListItem:
    """One space entry of the exported IP list"""

    name: str
    description: str
    ips: list[str] = field(default_factory=list)

    @classmethod
    def from_space(cls, space: Space, nat: SpaceNAT) -> IPListItem:
        return cls(
            name=space.composite_name,
            description=f"IP list from `{space.team_name} > {space.name}`",
            ips=list(nat.sources),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "ips": list(self.ips)}


@dataclass
class IPList:
    """Root of the exported IP list document"""

    name: str
    description: str
    items: list[IPListItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "items": [item.to_dict() for item in self.items],
        }
